"""Convergence phase: compare vertex values between consecutive iterations."""
import numpy as np


def value_converged(previous: float, current: float, rel_tol: float, abs_tol: float) -> bool:
    """True when the change is small relative to the values or in absolute terms."""
    difference = abs(previous - current)
    size = max(abs(previous), abs(current))
    return difference <= size * rel_tol or difference <= abs_tol


def convergence_phase(previous: np.ndarray, current: np.ndarray, rel_tol: float, abs_tol: float) -> bool:
    """Check every ordered vertex value (best included) against the previous iteration."""
    return all(
        value_converged(float(p), float(c), rel_tol, abs_tol)
        for p, c in zip(previous, current)
    )
