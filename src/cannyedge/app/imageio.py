# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Raster decode/encode for the CannyEdge pipeline (OpenCV backed)."""

from pathlib import Path
from typing import Tuple, Union

import numpy as np
import cv2

from cannyedge.core.errors import (
    ImageDecodeError, ImageEncodeError, UnsupportedExtensionError,
)

ALLOWED_EXTENSIONS: Tuple[str, ...] = ("jpg", "jpeg", "png")
DEFAULT_OUTPUT_DIR = "output"
JPEG_QUALITY = 100

PathLike = Union[str, Path]


def check_extension(extension: str) -> str:
    """Return ``extension`` if an encoder exists for it."""
    if extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedExtensionError(
            f"Output file extension {extension!r} not allowed, "
            f"use one of the following -> {list(ALLOWED_EXTENSIONS)}"
        )
    return extension


def split_output_path(output: PathLike) -> Tuple[Path, str, str]:
    """Split an output path into (destination dir, base name, extension).

    The extension is the text after the last dot; inner dots stay in the
    base name. A bare filename is placed in :data:`DEFAULT_OUTPUT_DIR`.

    Raises:
        UnsupportedExtensionError: If there is no extension or it has no
            encoder.
    """
    path = Path(output)
    name = path.name
    if "." not in name:
        raise UnsupportedExtensionError(f"Output path {str(output)!r} has no file extension")
    base, extension = name.rsplit(".", 1)
    if not base:
        raise UnsupportedExtensionError(f"Output path {str(output)!r} has no file name")
    check_extension(extension)

    dest = path.parent if len(path.parts) > 1 else Path(DEFAULT_OUTPUT_DIR)
    return dest, base, extension


def load_image(path: PathLike) -> np.ndarray:
    """Decode an image file into a uint8 array in OpenCV channel order.

    Gray files stay 2-D and files with transparency keep their alpha
    channel (BGRA). 16-bit samples are reduced to their high byte.

    Raises:
        ImageDecodeError: If the file is missing or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageDecodeError(f"file not found: {path}")
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageDecodeError(f"cannot decode image data: {path}")
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    return img


def export_image(img: np.ndarray, dest: PathLike, filename: str,
                 extension: str) -> Path:
    """Encode ``img`` to ``dest/filename.extension``.

    PNG uses the encoder defaults; JPEG is written at quality 100.

    Returns:
        Path of the written file.

    Raises:
        UnsupportedExtensionError: For extensions other than png/jpg/jpeg.
        ImageEncodeError: If the encoder fails to write the file.
    """
    check_extension(extension)
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    out_path = dest / f"{filename}.{extension}"

    params = []
    if extension in ("jpg", "jpeg"):
        params = [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY]

    try:
        ok = cv2.imwrite(str(out_path), img, params)
    except cv2.error as exc:
        raise ImageEncodeError(f"failed to encode {out_path}: {exc}") from exc
    if not ok:
        raise ImageEncodeError(f"failed to write {out_path}")
    return out_path
