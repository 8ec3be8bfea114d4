# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.

"""CannyEdge command-line entry point.

Usage: ``cannyedge INPUT OUTPUT``. The output extension (png, jpg, jpeg)
selects the encoder; a bare output filename is written under
``output/``.
"""

import argparse
import sys
from typing import List, Optional

from cannyedge.core.errors import CannyEdgeError, UnsupportedExtensionError
from cannyedge.app.imageio import split_output_path
from cannyedge.app.pipeline import CannyPipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cannyedge",
        description="Gaussian-smoothed Sobel edge map of an image",
    )
    parser.add_argument("input", help="input image path")
    parser.add_argument("output", help="output image path (.png, .jpg or .jpeg)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Reject the output format before touching the input
    try:
        split_output_path(args.output)
    except UnsupportedExtensionError as exc:
        parser.error(str(exc))

    print("--- Script initialized! ---", flush=True)

    pipeline = CannyPipeline(verbose=True)
    try:
        written = pipeline.process_file(args.input, args.output)
    except CannyEdgeError as exc:
        print(f"cannyedge: error: {exc}", file=sys.stderr, flush=True)
        return 1

    print()
    print("=" * 56)
    print(">>> Script executed successfully <<<")
    print(f">> Input file: {args.input}")
    print(f">> Output file: {written}")
    print("=" * 56, flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
