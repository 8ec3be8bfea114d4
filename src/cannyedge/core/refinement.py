# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Extension point for the Canny stages after the gradient threshold.

Non-maximum suppression, double thresholding and hysteresis are not
implemented. The pipeline calls an :class:`EdgeRefiner` after the
gradient stage; :class:`NoRefinement` passes the map through unchanged.
"""

import abc

import numpy as np

from cannyedge.core.tensor import validate_tensor

#: Stages a full Canny refiner would perform, in order
CANNY_STAGES = ("non_maximum_suppression", "double_threshold", "hysteresis")


class EdgeRefiner(abc.ABC):
    """Turns a thresholded gradient map into a refined edge map."""

    name = "base"

    @abc.abstractmethod
    def refine(self, gradient: np.ndarray) -> np.ndarray:
        """Return a new tensor; ``gradient`` must not be modified."""


class NoRefinement(EdgeRefiner):
    """Identity refiner: the single global threshold is the last stage."""

    name = "none"

    def refine(self, gradient: np.ndarray) -> np.ndarray:
        return validate_tensor(gradient).copy()
