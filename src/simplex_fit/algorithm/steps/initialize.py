"""Initialization phase: validate the guess and build the starting simplex.

Vertex 0 is the guess itself; vertex i moves coordinate i-1 by that axis'
step. All N+1 vertices are evaluated here, before any budget applies.
"""
from typing import Callable, Optional, Sequence

import numpy as np

from simplex_fit.algorithm.components.simplex import Simplex
from simplex_fit.errors import ConfigurationError


def as_point(initial_guess: Sequence[float], expected_dim: Optional[int] = None) -> np.ndarray:
    """Convert the caller's guess into a finite 1-D float array."""
    try:
        x0 = np.array(initial_guess, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Initial guess must be a sequence of numbers: {exc}") from exc
    if x0.ndim != 1 or x0.size == 0:
        raise ConfigurationError("Initial guess must be a non-empty 1-D sequence.")
    if not np.all(np.isfinite(x0)):
        raise ConfigurationError("Initial guess must contain only finite values.")
    if expected_dim is not None and x0.size != expected_dim:
        raise ConfigurationError(
            f"Initial guess has {x0.size} coordinates but the objective expects {expected_dim}."
        )
    return x0


def build_vertices(x0: np.ndarray, steps: Sequence[float]) -> np.ndarray:
    """Return the (N+1, N) vertex array for the starting simplex."""
    dim = x0.size
    steps = np.asarray(steps, dtype=float)
    if steps.shape != (dim,):
        raise ConfigurationError(f"Expected {dim} step sizes, got {steps.size}.")
    if np.any(steps == 0.0):
        axes = np.flatnonzero(steps == 0.0).tolist()
        raise ConfigurationError(f"Degenerate initial simplex: zero step on axis {axes}.")

    vertices = np.tile(x0, (dim + 1, 1))
    vertices[1:] += np.diag(steps)

    # a step far below the coordinate's magnitude can round away entirely
    for i in range(dim):
        if vertices[i + 1, i] == x0[i]:
            raise ConfigurationError(
                f"Degenerate initial simplex: step {steps[i]} vanishes against coordinate {x0[i]} on axis {i}."
            )
    return vertices


def initialize_phase(evaluate: Callable[[np.ndarray], float], x0: np.ndarray, steps: Sequence[float]) -> Simplex:
    """Build, evaluate and order the starting simplex."""
    vertices = build_vertices(x0, steps)
    values = np.array([evaluate(v) for v in vertices], dtype=float)
    simplex = Simplex(vertices, values)
    simplex.order()
    return simplex
