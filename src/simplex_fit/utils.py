"""
Utility helpers for runs outside the optimizer core.

Responsibilities:
  • Seeded random initial guesses (the optimizer itself never draws randomness).
  • Filesystem helpers for run outputs.
"""

from pathlib import Path
from typing import Optional

import numpy as np


def make_rng(seed: Optional[int]) -> np.random.Generator:
    """
    Per-run NumPy generator. Use an explicit seed for reproducible starts.
    """
    return np.random.default_rng(seed)


def random_initial_guess(
    dim: int,
    seed: Optional[int] = None,
    low: float = 0.0,
    high: float = 1.0,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Draw a starting point uniformly from [low, high) in every coordinate.

    Args:
        dim: Number of coordinates.
        seed: Seed for a fresh generator; ignored when `rng` is given.
        low, high: Sampling bounds (defaults match the unit-interval starts
            of the demonstration runs).
        rng: Existing generator to draw from.
    """
    if not isinstance(dim, int) or dim <= 0:
        raise ValueError("dim must be a positive int.")
    if not high > low:
        raise ValueError("high must be greater than low.")
    rng = rng if rng is not None else make_rng(seed)
    return rng.uniform(low, high, size=dim)


def ensure_dirs(*paths: Path) -> None:
    """
    Create all given directories (recursively) if they do not exist.
    """
    for p in paths:
        Path(p).mkdir(parents=True, exist_ok=True)
