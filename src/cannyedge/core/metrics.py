# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Evaluation metrics for CannyEdge gradient maps.

A gradient map is scored as a binary edge map (non-zero cells) against
ground-truth edges using distance-transform matching with a pixel
tolerance. Gradient edges are two to three pixels wide, so exact pixel
overlap would undercount hits.
"""

import numpy as np
from scipy.ndimage import distance_transform_edt


def nonzero_count(tensor: np.ndarray) -> int:
    """Number of cells that survived thresholding."""
    return int(np.count_nonzero(tensor))


def interior_mask(shape: tuple, border: int) -> np.ndarray:
    """Boolean mask that is False on the unprocessed frame of width ``border``."""
    mask = np.zeros(shape, dtype=bool)
    h, w = shape
    if h > 2 * border and w > 2 * border:
        mask[border:h - border, border:w - border] = True
    return mask


def gt_edges_from_image(img: np.ndarray) -> np.ndarray:
    """Ground-truth edges of a synthetic image: pixels next to a value change.

    Marks every pixel whose right or lower neighbor differs, on both sides
    of the transition.
    """
    img = np.asarray(img)
    diff_r = img[:, :-1] != img[:, 1:]
    diff_d = img[:-1, :] != img[1:, :]

    gt = np.zeros(img.shape, dtype=bool)
    gt[:, :-1] |= diff_r
    gt[:, 1:] |= diff_r
    gt[:-1, :] |= diff_d
    gt[1:, :] |= diff_d
    return gt


def edge_match_scores(gradient: np.ndarray,
                      gt: np.ndarray,
                      tol_px: int = 2,
                      border: int = 0) -> dict:
    """Precision, recall and F1 of a gradient map against ground truth.

    Args:
        gradient: Thresholded gradient map; non-zero cells are edges.
        gt: Ground-truth edge map (boolean).
        tol_px: Matching tolerance in pixels.
        border: Width of the unprocessed frame, excluded from both maps.

    Returns:
        Dictionary with keys 'p', 'r', 'f1', 'TP', 'FP', 'FN'.
    """
    keep = interior_mask(gt.shape, border)
    pred = (np.asarray(gradient) != 0) & keep
    gt = np.asarray(gt, dtype=bool) & keep

    ps = int(pred.sum())
    gs = int(gt.sum())
    if ps == 0 and gs == 0:
        return {"p": 1.0, "r": 1.0, "f1": 1.0, "TP": 0, "FP": 0, "FN": 0}
    if ps == 0 or gs == 0:
        return {"p": 0.0, "r": 0.0, "f1": 0.0, "TP": 0, "FP": ps, "FN": gs}

    dist_to_gt = distance_transform_edt(~gt)
    dist_to_pred = distance_transform_edt(~pred)

    tp = int((pred & (dist_to_gt <= tol_px)).sum())
    fp = ps - tp
    fn = int((gt & (dist_to_pred > tol_px)).sum())

    p = tp / (tp + fp + 1e-8)
    r = (gs - fn) / (gs + 1e-8)
    f1 = 2 * p * r / (p + r + 1e-8)
    return {"p": p, "r": r, "f1": f1, "TP": tp, "FP": fp, "FN": fn}
