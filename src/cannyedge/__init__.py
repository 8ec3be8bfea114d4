# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""CannyEdge: Gaussian smoothing and Sobel gradient edge maps.

A Canny-style front-end that turns a raster image into a thresholded
gradient-magnitude map using integer Gaussian kernels and a fixed
Sobel operator.
"""

__version__ = "0.4.0"
__author__ = "Vasile Lucian Borbeleac"
__copyright__ = "© 2024-2026 FRAGMERGENT TECHNOLOGY S.R.L."
