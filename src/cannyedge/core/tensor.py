# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Intensity tensors and conversions to and from decoded images.

An intensity tensor is a 2-D ``uint8`` array indexed ``tensor[row, col]``
with the origin at the top-left pixel. Decoded images follow OpenCV
conventions (BGR / BGRA channel order), so decode and encode share the
same axis order and a tensor maps 1:1 onto image pixels.
"""

from typing import Tuple

import numpy as np
import cv2

from cannyedge.core.errors import ConversionError, EmptyImageError


def new_tensor(shape: Tuple[int, int]) -> np.ndarray:
    """Allocate a zero-initialized tensor; unset cells stay black."""
    return np.zeros(shape, dtype=np.uint8)


def validate_tensor(tensor: np.ndarray) -> np.ndarray:
    """Check that ``tensor`` is a 2-D 8-bit intensity grid.

    Raises:
        ConversionError: On any other dtype or dimensionality.
    """
    if not isinstance(tensor, np.ndarray):
        raise ConversionError(f"expected a numpy array, got {type(tensor).__name__}")
    if tensor.ndim != 2 or tensor.dtype != np.uint8:
        raise ConversionError(
            f"expected a 2-D uint8 tensor, got ndim={tensor.ndim} dtype={tensor.dtype}"
        )
    return tensor


def _premultiply(image: np.ndarray) -> np.ndarray:
    """Scale the color channels of a BGRA image by its alpha, dropping alpha."""
    alpha = image[:, :, 3:4].astype(np.uint16)
    bgr = (image[:, :, :3].astype(np.uint16) * alpha + 127) // 255
    return bgr.astype(np.uint8)


def from_color_image(image: np.ndarray) -> np.ndarray:
    """Reduce a decoded image to luminance, one byte per pixel.

    Uses OpenCV's fixed perceptual weighting
    (Y = 0.299 R + 0.587 G + 0.114 B). BGRA input is alpha-premultiplied
    first, so transparent pixels darken towards black.

    Args:
        image: 2-D gray, ``H×W×3`` BGR or ``H×W×4`` BGRA array.

    Returns:
        A fresh ``(H, W)`` uint8 tensor.

    Raises:
        EmptyImageError: If the image has zero width or height.
        ConversionError: If the layout or channel count is unsupported or
            the conversion did not yield an 8-bit gray tensor.
    """
    image = np.asarray(image)
    if image.ndim not in (2, 3):
        raise ConversionError(f"unsupported image layout: shape={image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise EmptyImageError(f"image has empty dimensions: shape={image.shape}")

    if image.dtype != np.uint8:
        raise ConversionError(f"expected 8-bit samples, got dtype={image.dtype}")

    if image.ndim == 2:
        gray = image.copy()
    elif image.shape[2] == 1:
        gray = image[:, :, 0].copy()
    elif image.shape[2] == 3:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    elif image.shape[2] == 4:
        gray = cv2.cvtColor(_premultiply(image), cv2.COLOR_BGR2GRAY)
    else:
        raise ConversionError(f"unsupported channel layout: shape={image.shape}")

    # Model check: the conversion must land in the gray color model
    if gray.ndim != 2 or gray.dtype != np.uint8 or gray.shape != image.shape[:2]:
        raise ConversionError("Image was not converted to grayscale")
    return gray


def to_color_image(tensor: np.ndarray) -> np.ndarray:
    """Turn a tensor back into a displayable grayscale image (1:1 pixels)."""
    return validate_tensor(tensor).copy()
