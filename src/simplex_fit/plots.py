"""Convergence plots for saved best-value curves."""

from __future__ import annotations

import os
from collections import defaultdict
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

# Floor for log-scale plotting; exact zeros are common at the optimum.
VALUE_FLOOR = 1e-300


def load_curves(curves_dir: str) -> dict[str, list[np.ndarray]]:
    """Group `<problem>_run<k>.npy` files by problem name."""
    curves: dict[str, list[np.ndarray]] = defaultdict(list)
    for path in sorted(Path(curves_dir).glob("*_run*.npy")):
        problem = path.stem.rsplit("_run", 1)[0]
        curves[problem].append(np.load(path))
    return dict(curves)


def plot_convergence(curves_dir: str, outpath: str) -> str:
    """One panel per problem with every run's best value per iteration (log scale)."""
    curves = load_curves(curves_dir)
    if not curves:
        raise FileNotFoundError(f"No curve files found in {curves_dir}.")

    fig, axes = plt.subplots(1, len(curves), figsize=(4.5 * len(curves), 3.5), squeeze=False)
    for ax, (problem, runs) in zip(axes[0], sorted(curves.items())):
        for curve in runs:
            if curve.size:
                ax.semilogy(np.maximum(np.abs(curve), VALUE_FLOOR), lw=0.8, alpha=0.6)
        ax.set_title(problem)
        ax.set_xlabel("Iteration")
        ax.set_ylabel("|best value|")
        ax.grid(True, which="both", alpha=0.3)

    fig.tight_layout()
    os.makedirs(os.path.dirname(outpath) or ".", exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight")
    plt.close(fig)
    return outpath
