# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Numeric core: intensity tensors, kernels, convolution and gradients."""

from cannyedge.core.errors import (
    CannyEdgeError, InvalidKernelParameter, ConversionError, EmptyImageError,
    ImageDecodeError, ImageEncodeError, UnsupportedExtensionError,
)
from cannyedge.core.tensor import from_color_image, to_color_image, new_tensor
from cannyedge.core.kernels import (
    gaussian_kernel, gaussian_weights, quantize_kernel,
    SOBEL_X, SOBEL_Y, SHARPEN,
)
from cannyedge.core.convolution import convolve, correlate_interior, narrow
from cannyedge.core.gradient import compute_gradient_magnitude, DEFAULT_THRESHOLD
from cannyedge.core.refinement import EdgeRefiner, NoRefinement
