# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Generic 2-D convolution engine with an unprocessed border frame.

Only cells whose full kernel window lies inside the tensor are computed.
The frame of width ``size // 2`` on every side keeps its zero default,
which shows up as a dark border in the output image.
"""

from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from cannyedge.core.kernels import kernel_half_width
from cannyedge.core.tensor import new_tensor, validate_tensor


def _accumulator_dtype(kernel: np.ndarray) -> np.dtype:
    if np.issubdtype(kernel.dtype, np.integer) or kernel.dtype == np.bool_:
        return np.dtype(np.int64)
    return np.dtype(np.float64)


def correlate_interior(tensor: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Weighted window sums over the interior, in a wide accumulator.

    For ``half <= r < H - half`` and ``half <= c < W - half``::

        out[r, c] = sum_ij tensor[r + i, c + j] * kernel[i + half, j + half]

    All other cells are 0. Integer kernels accumulate in int64, float
    kernels in float64, so no intermediate sum can overflow.

    Args:
        tensor: 2-D input array (not modified).
        kernel: Square, odd-sized weight matrix.

    Returns:
        Array of the same shape as ``tensor``.
    """
    kernel = np.asarray(kernel)
    half = kernel_half_width(kernel)
    acc = _accumulator_dtype(kernel)
    h, w = tensor.shape
    size = kernel.shape[0]

    out = np.zeros((h, w), dtype=acc)
    if h < size or w < size:
        return out

    windows = sliding_window_view(tensor.astype(acc, copy=False), (size, size))
    out[half:h - half, half:w - half] = np.einsum(
        "rcij,ij->rc", windows, kernel.astype(acc, copy=False)
    )
    return out


def narrow(values: np.ndarray, saturate: bool = False) -> np.ndarray:
    """Floor wide values and narrow them to 8 bits.

    By default the cast truncates like an unsigned byte conversion
    (``value mod 256``), so out-of-range values wrap. With ``saturate``
    they are clamped to [0, 255] instead.
    """
    floored = np.floor(values).astype(np.int64)
    if saturate:
        return np.clip(floored, 0, 255).astype(np.uint8)
    return np.mod(floored, 256).astype(np.uint8)


def convolve(tensor: np.ndarray, kernel: np.ndarray,
             scalar: Optional[float] = None,
             saturate: bool = False) -> np.ndarray:
    """Convolve an intensity tensor with a square kernel.

    Args:
        tensor: ``(H, W)`` uint8 intensity tensor (not modified).
        kernel: Square, odd-sized kernel.
        scalar: Normalization divisor applied to the window sums
            (Gaussian kernels); ``None`` keeps the raw sums.
        saturate: Clamp instead of truncating when narrowing.

    Returns:
        A fresh ``(H, W)`` uint8 tensor with a zero border of width
        ``size // 2``.
    """
    validate_tensor(tensor)
    sums = correlate_interior(tensor, kernel)
    if scalar is not None:
        if not scalar > 0:
            raise ValueError(f"normalization scalar must be positive, got {scalar!r}")
        sums = sums / float(scalar)

    out = new_tensor(tensor.shape)
    out[...] = narrow(sums, saturate=saturate)
    return out
