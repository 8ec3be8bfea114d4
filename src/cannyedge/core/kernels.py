# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Convolution kernels for the CannyEdge pipeline.

Synthesizes separable Gaussian kernels (density sampling or normal-CDF
buckets), quantizes them to fixed-point integers, and provides the fixed
3×3 Sobel and sharpening operators.
"""

import functools
import math
from typing import Tuple

import numpy as np
from scipy.special import ndtr

from cannyedge.core.errors import InvalidKernelParameter

GAUSSIAN_METHODS = ("sample", "cdf")

#: Fixed-point value assigned to the center cell of a quantized kernel
DEFAULT_PRECISION = 256

SOBEL_X = np.array([[-1, 0, 1],
                    [-2, 0, 2],
                    [-1, 0, 1]], dtype=np.int64)

SOBEL_Y = np.array([[-1, -2, -1],
                    [0, 0, 0],
                    [1, 2, 1]], dtype=np.int64)

SHARPEN = np.array([[0, -1, 0],
                    [-1, 5, -1],
                    [0, -1, 0]], dtype=np.int64)

for _k in (SOBEL_X, SOBEL_Y, SHARPEN):
    _k.setflags(write=False)
del _k


def kernel_half_width(kernel: np.ndarray) -> int:
    """Return ``size // 2`` for a square, odd-sized kernel.

    Raises:
        InvalidKernelParameter: If the kernel is not square and odd.
    """
    kernel = np.asarray(kernel)
    if kernel.ndim != 2 or kernel.shape[0] != kernel.shape[1]:
        raise InvalidKernelParameter(f"kernel must be square, got shape {kernel.shape}")
    if kernel.shape[0] % 2 == 0:
        raise InvalidKernelParameter(f"kernel size must be odd, got {kernel.shape[0]}")
    return kernel.shape[0] // 2


def validate_gaussian_params(size: int, sigma: float,
                             method: str = "sample",
                             precision: int = DEFAULT_PRECISION) -> None:
    """Reject kernel parameters before any tensor work starts.

    Raises:
        InvalidKernelParameter: On a non-integer, even or < 3 size, a
            non-positive or non-finite sigma, an unknown method, or a
            precision below 1.
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidKernelParameter(f"kernel size must be an integer, got {size!r}")
    if size < 3 or size % 2 == 0:
        raise InvalidKernelParameter(f"kernel size must be odd and >= 3, got {size}")
    try:
        sigma_f = float(sigma)
    except (TypeError, ValueError):
        raise InvalidKernelParameter(f"sigma must be a number, got {sigma!r}") from None
    if not math.isfinite(sigma_f) or sigma_f <= 0.0:
        raise InvalidKernelParameter(f"sigma must be positive, got {sigma!r}")
    if method not in GAUSSIAN_METHODS:
        raise InvalidKernelParameter(
            f"unknown Gaussian method {method!r}, expected one of {GAUSSIAN_METHODS}"
        )
    if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)) \
            or precision < 1:
        raise InvalidKernelParameter(f"precision must be an integer >= 1, got {precision!r}")


def _density_1d(size: int, sigma: float) -> np.ndarray:
    ax = np.arange(-(size // 2), size // 2 + 1, dtype=np.float64)
    return np.exp(-(ax * ax) / (2.0 * sigma * sigma)) / (math.sqrt(2.0 * math.pi) * sigma)


def _cdf_buckets_1d(size: int, sigma: float) -> np.ndarray:
    # Probability mass of `size` equal buckets spanning [-sigma, +sigma]
    edges = np.linspace(-sigma, sigma, size + 1)
    return np.diff(ndtr(edges))


def gaussian_weights(size: int, sigma: float, method: str = "sample") -> np.ndarray:
    """Build a real-valued separable Gaussian kernel that sums to 1.

    Methods:
        ``sample``: the 1-D Gaussian density sampled at integer offsets
            ``-size//2 .. size//2``.
        ``cdf``: ``[-sigma, +sigma]`` split into ``size`` equal intervals,
            each weighted by its standard-normal probability mass.

    The 2-D kernel is the outer product of the 1-D sequence with itself,
    divided by the sum of all its entries.

    Args:
        size: Odd kernel size >= 3.
        sigma: Standard deviation (> 0).
        method: ``"sample"`` or ``"cdf"``.

    Returns:
        ``(size, size)`` float64 array.
    """
    validate_gaussian_params(size, sigma, method)
    sigma = float(sigma)
    k1 = _density_1d(size, sigma) if method == "sample" else _cdf_buckets_1d(size, sigma)
    k2 = np.outer(k1, k1)
    return k2 / k2.sum()


def quantize_kernel(weights: np.ndarray,
                    precision: int = DEFAULT_PRECISION) -> Tuple[np.ndarray, float]:
    """Quantize a non-negative kernel to fixed-point integers.

    Each weight is floored after scaling by ``precision / center_weight``,
    so the center cell becomes exactly ``precision``. The normalization
    scalar is the sum of the quantized weights: dividing an integer
    convolution by it maps a constant field back onto itself.

    Returns:
        ``(kernel, scalar)`` with an int64 kernel and a float scalar.
    """
    weights = np.asarray(weights, dtype=np.float64)
    half = kernel_half_width(weights)
    if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)) \
            or precision < 1:
        raise InvalidKernelParameter(f"precision must be an integer >= 1, got {precision!r}")
    center = weights[half, half]
    if not center > 0.0 or np.any(weights < 0.0):
        raise InvalidKernelParameter("kernel must be non-negative with a positive center")

    kernel = np.floor(weights / center * precision).astype(np.int64)
    return kernel, float(kernel.sum())


@functools.lru_cache(maxsize=16)
def _gaussian_kernel_cached(size: int, sigma: float, method: str,
                            precision: int) -> Tuple[np.ndarray, float]:
    kernel, scalar = quantize_kernel(gaussian_weights(size, sigma, method), precision)
    kernel.setflags(write=False)
    return kernel, scalar


def gaussian_kernel(size: int, sigma: float, method: str = "sample",
                    precision: int = DEFAULT_PRECISION) -> Tuple[np.ndarray, float]:
    """Synthesize a quantized Gaussian kernel and its normalization scalar.

    Results are cached per parameter set; the returned kernel is read-only.

    Raises:
        InvalidKernelParameter: See :func:`validate_gaussian_params`.
    """
    validate_gaussian_params(size, sigma, method, precision)
    return _gaussian_kernel_cached(int(size), float(sigma), method, int(precision))
