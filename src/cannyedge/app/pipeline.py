# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.

"""CannyEdge Processing Pipeline.

Composes the core stages into a configurable single-shot pipeline:
decode → grayscale → Gaussian smoothing → gradient threshold →
refinement → encode.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from cannyedge.core.convolution import convolve
from cannyedge.core.gradient import compute_gradient_magnitude, DEFAULT_THRESHOLD
from cannyedge.core.kernels import gaussian_kernel, DEFAULT_PRECISION
from cannyedge.core.metrics import nonzero_count
from cannyedge.core.refinement import EdgeRefiner, NoRefinement
from cannyedge.core.tensor import from_color_image, to_color_image, validate_tensor
from cannyedge.app.imageio import export_image, load_image, split_output_path


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

PIPELINE_PRESETS: Dict[str, dict] = {
    "canny": {
        "name": "Canny (truncated)",
        "description": "Gaussian 5x5 smoothing, sharpen + Sobel gradient, global threshold",
        "kernel_size": 5,
        "sigma": 2.5,
        "kernel_method": "sample",
        "precision": DEFAULT_PRECISION,
        "threshold": DEFAULT_THRESHOLD,
        "saturate": False,
        "gradient": True,
    },
    "smooth_only": {
        "name": "Gaussian Blur",
        "description": "Gaussian 5x5 smoothing only, no gradient stage",
        "kernel_size": 5,
        "sigma": 2.5,
        "kernel_method": "sample",
        "precision": DEFAULT_PRECISION,
        "threshold": DEFAULT_THRESHOLD,
        "saturate": False,
        "gradient": False,
    },
    "fine": {
        "name": "Fine Detail",
        "description": "Gaussian 3x3 smoothing for thin features",
        "kernel_size": 3,
        "sigma": 1.0,
        "kernel_method": "sample",
        "precision": DEFAULT_PRECISION,
        "threshold": DEFAULT_THRESHOLD,
        "saturate": False,
        "gradient": True,
    },
}

DEFAULT_PRESET = "canny"


class CannyPipeline:
    """Complete CannyEdge processing pipeline."""

    def __init__(self, preset: str = DEFAULT_PRESET, verbose: bool = False,
                 refiner: Optional[EdgeRefiner] = None):
        self.verbose = verbose
        self.refiner = refiner if refiner is not None else NoRefinement()
        self.preset = preset
        self.params: dict = {}
        self.set_preset(preset)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_preset(self, preset: str):
        if preset not in PIPELINE_PRESETS:
            preset = DEFAULT_PRESET
        self.preset = preset
        self.params = {k: v for k, v in PIPELINE_PRESETS[preset].items()}
        self._validate()

    def update_params(self, **kwargs):
        previous = dict(self.params)
        for k, v in kwargs.items():
            if k in self.params:
                self.params[k] = v
        try:
            self._validate()
        except (ValueError, TypeError):
            self.params = previous
            raise

    def _validate(self):
        self.kernel()
        if self.params["threshold"] < 0:
            raise ValueError(f"threshold must be non-negative, got {self.params['threshold']!r}")

    def kernel(self):
        """Return the (kernel, scalar) pair for the current parameters."""
        p = self.params
        return gaussian_kernel(p["kernel_size"], p["sigma"],
                               p["kernel_method"], p["precision"])

    def _log(self, msg: str):
        if self.verbose:
            print(msg, flush=True)

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def run(self, tensor: np.ndarray) -> Dict[str, Any]:
        """Run the numeric stages on an intensity tensor.

        Returns a dict with the smoothed tensor, gradient map, refined
        edge map, the kernel used, non-zero count and latency.
        """
        t0 = time.perf_counter()
        p = self.params
        validate_tensor(tensor)
        res: Dict[str, Any] = {"preset": self.preset}

        self._log("> Generating gaussian filter...")
        kernel, scalar = self.kernel()
        res["kernel"] = kernel
        res["kernel_scalar"] = scalar
        self._log("< Done")

        self._log("> Applying gaussian filter...")
        smoothed = convolve(tensor, kernel, scalar=scalar, saturate=p["saturate"])
        res["smoothed"] = smoothed
        self._log("< Done")

        if p["gradient"]:
            self._log("> Computing gradient magnitude...")
            gradient = compute_gradient_magnitude(smoothed, threshold=p["threshold"],
                                                  saturate=p["saturate"])
            self._log("< Done")

            self._log(f"> Refining edges ({self.refiner.name})...")
            edges = self.refiner.refine(gradient)
            self._log("< Done")
        else:
            gradient = None
            edges = smoothed

        res["gradient"] = gradient
        res["edges"] = edges
        res["nonzero"] = nonzero_count(edges)
        res["latency_ms"] = round((time.perf_counter() - t0) * 1000, 1)
        return res

    def process_image(self, image: np.ndarray) -> Dict[str, Any]:
        """Process a decoded image; adds the gray tensor and output image."""
        self._log("> Converting gray scale...")
        gray = from_color_image(image)
        self._log("< Done")

        res = self.run(gray)
        res["gray"] = gray

        self._log("> Tensor to Image...")
        res["output"] = to_color_image(res["edges"])
        self._log("< Done")
        return res

    def process_file(self, input_path, output_path) -> Path:
        """Decode ``input_path``, process it and encode to ``output_path``.

        The output extension is checked before the input is read.

        Returns:
            Path of the written file.
        """
        dest, filename, extension = split_output_path(output_path)

        self._log("> Loading Image")
        image = load_image(input_path)
        self._log("< Done")

        res = self.process_image(image)

        self._log("> Generating image...")
        written = export_image(res["output"], dest, filename, extension)
        self._log("< Image generated successfully!")
        return written
