# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Synthetic 8-bit test images for CannyEdge validation.

Flat fields, point sources and simple geometric shapes with known
edges, drawn with :mod:`skimage.draw` so every image is deterministic.
"""

import numpy as np
from skimage.draw import disk, line, polygon, rectangle

FOREGROUND = 255
BACKGROUND = 0


def _make_canvas(size: int, value: int = BACKGROUND) -> np.ndarray:
    return np.full((size, size), value, dtype=np.uint8)


# ============================================================
# SCENARIO IMAGES
# ============================================================

def make_uniform(size: int = 20, value: int = 128) -> np.ndarray:
    """Constant gray field: zero gradient everywhere."""
    return _make_canvas(size, value)


def make_single_pixel(size: int = 20, row: int = 10, col: int = 10,
                      value: int = FOREGROUND) -> np.ndarray:
    """One bright pixel on a black field (impulse response)."""
    img = _make_canvas(size)
    img[row, col] = value
    return img


def make_step(size: int = 64, value: int = FOREGROUND) -> np.ndarray:
    """Vertical step edge at the center column."""
    img = _make_canvas(size)
    img[:, size // 2:] = value
    return img


# ============================================================
# SHAPES
# ============================================================

def make_circle_square(size: int = 128) -> np.ndarray:
    """Square plus circle: straight and curved boundaries."""
    img = _make_canvas(size)
    s = size / 128.0
    rr, cc = rectangle(start=(int(18 * s), int(18 * s)),
                       end=(int(60 * s) - 1, int(60 * s) - 1), shape=img.shape)
    img[rr, cc] = FOREGROUND
    rr, cc = disk((int(70 * s), int(76 * s)), int(34 * s), shape=img.shape)
    img[rr, cc] = FOREGROUND
    return img


def make_triangle(size: int = 128) -> np.ndarray:
    """Triangle: angled edges of varying orientation."""
    img = _make_canvas(size)
    s = size / 128.0
    rows = np.array([20, 100, 100]) * s
    cols = np.array([64, 20, 108]) * s
    rr, cc = polygon(rows, cols, shape=img.shape)
    img[rr, cc] = FOREGROUND
    return img


def make_thin_lines(size: int = 128) -> np.ndarray:
    """1px strokes: horizontal, vertical and diagonal."""
    img = _make_canvas(size)
    last = size - 10
    for r0, c0, r1, c1 in [(size // 4, 10, size // 4, last),
                           (10, size // 4, last, size // 4),
                           (10, 10, last, last)]:
        rr, cc = line(r0, c0, r1, c1)
        img[rr, cc] = FOREGROUND
    return img


def make_checker(size: int = 128, cell: int = 16) -> np.ndarray:
    """Checkerboard with ``cell``-pixel squares."""
    idx = np.arange(size) // cell
    mask = (idx[:, None] + idx[None, :]) % 2 == 0
    return np.where(mask, FOREGROUND, BACKGROUND).astype(np.uint8)


# ============================================================
# REGISTRY
# ============================================================

SHAPES: dict = {
    "uniform": make_uniform,
    "single_pixel": make_single_pixel,
    "step": make_step,
    "circle_square": make_circle_square,
    "triangle": make_triangle,
    "thin_lines": make_thin_lines,
    "checker": make_checker,
}

#: Images with no edges to find
FLAT_SHAPES: set = {"uniform"}

#: Shapes with ground-truth boundaries, used for threshold sweeps
EDGE_SHAPES: list = [k for k in SHAPES if k not in FLAT_SHAPES and k != "single_pixel"]
