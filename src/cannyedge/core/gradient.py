# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Sobel gradient magnitude with a single global threshold.

Pipeline:
    1. Sharpening pre-pass (edge-contrast enhancement)
    2. Horizontal and vertical Sobel passes on the sharpened tensor
    3. Magnitude ceil(sqrt(gx² + gy²))
    4. Global threshold: magnitude <= T is suppressed to 0, kept
       magnitudes are clamped into [0, 255]

There is no weak/strong edge split and no edge linking; see
:mod:`cannyedge.core.refinement` for where those stages plug in.
"""

from typing import Tuple

import numpy as np

from cannyedge.core.convolution import convolve, correlate_interior, narrow
from cannyedge.core.kernels import SHARPEN, SOBEL_X, SOBEL_Y, kernel_half_width
from cannyedge.core.tensor import new_tensor, validate_tensor

#: 30% of the 8-bit range
DEFAULT_THRESHOLD = 255 * 0.3


def gradient_border_width() -> int:
    """Width of the unprocessed frame after sharpening plus Sobel passes."""
    return kernel_half_width(SHARPEN) + max(kernel_half_width(SOBEL_X),
                                            kernel_half_width(SOBEL_Y))


def sobel_components(sharpened: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return the raw signed (gx, gy) window sums of a tensor."""
    validate_tensor(sharpened)
    return correlate_interior(sharpened, SOBEL_X), correlate_interior(sharpened, SOBEL_Y)


def compute_gradient_magnitude(tensor: np.ndarray,
                               threshold: float = DEFAULT_THRESHOLD,
                               saturate: bool = False) -> np.ndarray:
    """Compute the thresholded gradient-magnitude map of a smoothed tensor.

    Args:
        tensor: Smoothed ``(H, W)`` uint8 tensor (not modified).
        threshold: Global cutoff; magnitudes <= threshold become 0.
        saturate: Clamp instead of truncating when narrowing the
            sharpened tensor. Kept magnitudes are always clamped.

    Returns:
        ``(H, W)`` uint8 gradient map. The frame of width
        :func:`gradient_border_width` is always 0.
    """
    validate_tensor(tensor)
    if threshold < 0:
        raise ValueError(f"threshold must be non-negative, got {threshold!r}")

    sharpened = convolve(tensor, SHARPEN, saturate=saturate)
    gx, gy = sobel_components(sharpened)

    sx = np.abs(gx)
    sy = np.abs(gy)
    magnitude = np.ceil(np.sqrt(sx * sx + sy * sy))

    out = new_tensor(tensor.shape)
    b = gradient_border_width()
    h, w = tensor.shape
    if h <= 2 * b or w <= 2 * b:
        return out

    inner = magnitude[b:h - b, b:w - b]
    kept = np.where(inner > threshold, inner, 0.0)
    # Kept magnitudes clamp so no surviving cell drops below the threshold
    out[b:h - b, b:w - b] = narrow(kept, saturate=True)
    return out
