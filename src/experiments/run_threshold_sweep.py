# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania
#
# CANNYEDGE THRESHOLD / SIGMA SWEEP
# =================================
# Pipeline under test:
#   Gaussian (5x5, sample method) -> sharpen -> Sobel Gx/Gy -> global threshold
#
# Sweeps the global gradient threshold and the Gaussian sigma over the
# synthetic shape registry and reports edge-match F1 (tol=2px) and the
# surviving-cell count. Surviving cells must never increase with the threshold.

import sys
import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(_ROOT / "src"))

FIGURES_DIR = Path(__file__).resolve().parent / "figures"
FIGURES_DIR.mkdir(parents=True, exist_ok=True)

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from cannyedge.core.convolution import convolve
from cannyedge.core.gradient import compute_gradient_magnitude, gradient_border_width
from cannyedge.core.kernels import gaussian_kernel
from cannyedge.core.metrics import edge_match_scores, gt_edges_from_image, nonzero_count
from cannyedge.core.shapes import SHAPES, EDGE_SHAPES

SIZE = 128
KERNEL_SIZE = 5
GT_TOL_PX = 2

THRESHOLD_SWEEP = [0.0, 25.0, 50.0, 76.5, 100.0, 150.0, 200.0]
SIGMA_SWEEP = [0.8, 1.2, 1.6, 2.0, 2.5, 3.0]
DEFAULT_SIGMA = 2.5
DEFAULT_THRESHOLD = 76.5


def smooth(img: np.ndarray, sigma: float, method: str = "sample") -> np.ndarray:
    kernel, scalar = gaussian_kernel(KERNEL_SIZE, sigma, method)
    return convolve(img, kernel, scalar=scalar)


def score(img: np.ndarray, gt: np.ndarray, sigma: float, threshold: float,
          method: str = "sample") -> dict:
    grad = compute_gradient_magnitude(smooth(img, sigma, method), threshold=threshold)
    # Border = Gaussian half-width + sharpen + Sobel
    border = KERNEL_SIZE // 2 + gradient_border_width()
    m = edge_match_scores(grad, gt, tol_px=GT_TOL_PX, border=border)
    m["n"] = nonzero_count(grad)
    return m


# ============================================================
# MAIN
# ============================================================
if __name__ == "__main__":
    t0 = time.time()

    shape_data = {}
    for name in EDGE_SHAPES:
        img = SHAPES[name](SIZE)
        shape_data[name] = {"img": img, "gt": gt_edges_from_image(img)}

    # =====================================================
    # PHASE 1: Threshold sweep at default sigma
    # =====================================================
    print("=" * 70, flush=True)
    print("PHASE 1: THRESHOLD SWEEP", flush=True)
    print(f"  sigma={DEFAULT_SIGMA}, kernel={KERNEL_SIZE}x{KERNEL_SIZE}", flush=True)
    print("=" * 70, flush=True)

    header = f"  {'Shape':14s} | " + " | ".join(f"T={t:6.1f}" for t in THRESHOLD_SWEEP)
    print(header, flush=True)
    print("  " + "-" * len(header), flush=True)

    thr_f1 = {}
    thr_n = {}
    for name, sd in shape_data.items():
        results = [score(sd["img"], sd["gt"], DEFAULT_SIGMA, t) for t in THRESHOLD_SWEEP]
        thr_f1[name] = [r["f1"] for r in results]
        thr_n[name] = [r["n"] for r in results]
        print(f"  {name:14s} | " + " | ".join(f"{f:8.3f}" for f in thr_f1[name]),
              flush=True)

        counts = thr_n[name]
        if any(b > a for a, b in zip(counts, counts[1:])):
            print(f"  !! {name}: surviving cells increased with threshold: {counts}",
                  flush=True)

    # =====================================================
    # PHASE 2: Sigma sweep at default threshold, both methods
    # =====================================================
    print(f"\n{'=' * 70}", flush=True)
    print("PHASE 2: SIGMA SWEEP (sample vs cdf)", flush=True)
    print(f"  threshold={DEFAULT_THRESHOLD}", flush=True)
    print(f"{'=' * 70}", flush=True)

    sig_f1 = {"sample": {}, "cdf": {}}
    for method in sig_f1:
        for name, sd in shape_data.items():
            sig_f1[method][name] = [score(sd["img"], sd["gt"], s, DEFAULT_THRESHOLD, method)["f1"]
                                    for s in SIGMA_SWEEP]
        med = np.median(np.array(list(sig_f1[method].values())), axis=0)
        print(f"  {method:6s} median F1: " + " ".join(f"{v:.3f}" for v in med), flush=True)

    # =====================================================
    # PHASE 3: Figures
    # =====================================================
    print(f"\n{'=' * 70}", flush=True)
    print("FIGURES", flush=True)
    print(f"{'=' * 70}", flush=True)

    fig1, (ax1a, ax1b) = plt.subplots(1, 2, figsize=(12, 4.5))
    for name in shape_data:
        ax1a.plot(THRESHOLD_SWEEP, thr_f1[name], "o-", label=name, markersize=4)
        ax1b.plot(THRESHOLD_SWEEP, thr_n[name], "o-", label=name, markersize=4)
    ax1a.axvline(DEFAULT_THRESHOLD, color="red", linestyle="--", alpha=0.5)
    ax1a.set_xlabel("Global threshold"); ax1a.set_ylabel("F1")
    ax1a.set_ylim(0.0, 1.05); ax1a.grid(True, alpha=0.3); ax1a.legend(fontsize=6)
    ax1b.set_xlabel("Global threshold"); ax1b.set_ylabel("Non-zero cells")
    ax1b.grid(True, alpha=0.3)
    fig1.suptitle(f"Threshold sweep (sigma={DEFAULT_SIGMA})", fontsize=11, fontweight="bold")
    plt.tight_layout()
    fig1.savefig(FIGURES_DIR / "threshold_sweep.png", dpi=150, bbox_inches="tight")
    plt.close(fig1)
    print("  ✓ threshold_sweep.png", flush=True)

    fig2, axes2 = plt.subplots(1, 2, figsize=(12, 4.5), sharey=True)
    for ax, method in zip(axes2, sig_f1):
        for name, vals in sig_f1[method].items():
            ax.plot(SIGMA_SWEEP, vals, "o-", label=name, markersize=4)
        ax.set_xlabel("sigma"); ax.set_title(f"{method} kernel")
        ax.set_ylim(0.0, 1.05); ax.grid(True, alpha=0.3)
    axes2[0].set_ylabel("F1"); axes2[0].legend(fontsize=6)
    fig2.suptitle(f"Sigma sweep (threshold={DEFAULT_THRESHOLD})", fontsize=11,
                  fontweight="bold")
    plt.tight_layout()
    fig2.savefig(FIGURES_DIR / "sigma_sweep.png", dpi=150, bbox_inches="tight")
    plt.close(fig2)
    print("  ✓ sigma_sweep.png", flush=True)

    # Example maps for one shape
    name = "circle_square"
    img = shape_data[name]["img"]
    sm = smooth(img, DEFAULT_SIGMA)
    grad = compute_gradient_magnitude(sm, DEFAULT_THRESHOLD)
    fig3, axes3 = plt.subplots(1, 3, figsize=(10, 3.5))
    for ax, data, title in [(axes3[0], img, "input"),
                            (axes3[1], sm, "smoothed"),
                            (axes3[2], grad, f"gradient (T={DEFAULT_THRESHOLD})")]:
        ax.imshow(data, cmap="gray", vmin=0, vmax=255)
        ax.set_title(title, fontsize=8); ax.axis("off")
    plt.tight_layout()
    fig3.savefig(FIGURES_DIR / "stages.png", dpi=150, bbox_inches="tight")
    plt.close(fig3)
    print("  ✓ stages.png", flush=True)

    print(f"\n✓ Total runtime: {time.time()-t0:.1f}s", flush=True)
