# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Exception hierarchy for the CannyEdge pipeline.

Every failure is fatal for a run; nothing here is retried or recovered.
"""


class CannyEdgeError(Exception):
    """Base class for all pipeline errors."""


# -- Input errors --

class ImageDecodeError(CannyEdgeError):
    """Input file is missing, unreadable or not a decodable image."""


class EmptyImageError(CannyEdgeError):
    """Decoded image has zero width or height."""


class UnsupportedExtensionError(CannyEdgeError, ValueError):
    """Output extension is not one of the supported encoders."""


class ImageEncodeError(CannyEdgeError):
    """Encoder failed to write the output file."""


# -- Parameter errors --

class InvalidKernelParameter(CannyEdgeError, ValueError):
    """Kernel size, sigma or quantization precision is out of range."""


# -- Conversion errors --

class ConversionError(CannyEdgeError):
    """Grayscale conversion produced something other than an 8-bit 2-D tensor."""
