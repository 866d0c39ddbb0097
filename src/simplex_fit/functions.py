"""Objective functions for the demonstration problems.

Each objective maps a point to a float (smaller is better) and carries its
`dimension`. Fitting objectives hold their sample coordinates as read-only
arrays, so one instance can be shared by independent runs.
"""

import numpy as np

from simplex_fit.errors import ConfigurationError, NumericError


def _samples(xs, ys):
    xs = np.array(xs, dtype=np.float64)
    ys = np.array(ys, dtype=np.float64)
    if xs.ndim != 1 or ys.ndim != 1:
        raise ConfigurationError("Sample coordinates must be 1-D sequences.")
    if xs.size != ys.size:
        raise ConfigurationError(f"Got {xs.size} x-values but {ys.size} y-values.")
    if xs.size == 0:
        raise ConfigurationError("At least one sample point is required.")
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        raise ConfigurationError("Sample coordinates must be finite.")
    xs.setflags(write=False)
    ys.setflags(write=False)
    return xs, ys


class Paraboloid:
    """z = x^2 + y^2, minimum 0 at the origin."""

    dimension = 2

    def __call__(self, variables) -> float:
        x, y = variables
        return float(x * x + y * y)

    def __repr__(self):
        return "Paraboloid()"


class LineFit:
    """Sum of absolute vertical residuals of y = slope * x + intercept.

    Least-absolute-deviation rather than least squares. Variables are
    (slope, intercept).
    """

    dimension = 2

    def __init__(self, xs, ys):
        self.xs, self.ys = _samples(xs, ys)

    def __call__(self, variables) -> float:
        slope, intercept = variables
        line_y = slope * self.xs + intercept
        return float(np.sum(np.abs(line_y - self.ys)))

    def __repr__(self):
        return f"LineFit(n_samples={self.xs.size})"


class CircleFit:
    """Summed distance from each sample to its projection on a candidate circle.

    Variables are (center_x, center_y, radius). A sample is projected along
    the ray from the center, so the closest point is
    (cx + dx / |d| * r, cy + dy / |d| * r).
    """

    dimension = 3

    def __init__(self, xs, ys):
        self.xs, self.ys = _samples(xs, ys)

    def __call__(self, variables) -> float:
        center_x, center_y, radius = variables
        delta_x = self.xs - center_x
        delta_y = self.ys - center_y
        magnitude = np.hypot(delta_x, delta_y)
        if np.any(magnitude == 0.0):
            i = int(np.flatnonzero(magnitude == 0.0)[0])
            raise NumericError(
                f"Sample ({self.xs[i]}, {self.ys[i]}) coincides with the candidate center; "
                "its projection onto the circle is undefined."
            )

        closest_x = center_x + delta_x / magnitude * radius
        closest_y = center_y + delta_y / magnitude * radius
        error = np.hypot(closest_x - self.xs, closest_y - self.ys)
        return float(np.sum(error))

    def __repr__(self):
        return f"CircleFit(n_samples={self.xs.size})"


# Sample sets of the three demonstration runs.
LINE_SAMPLES = ([-1.0, 0.0, 1.0], [-1.0, 0.0, 1.0])          # best fit: y = x
CIRCLE_SAMPLES = ([1.0, -1.0, 0.0, 0.0], [0.0, 0.0, 1.0, -1.0])  # unit circle at origin

PROBLEMS = {
    "paraboloid": {"make": Paraboloid,                       "dim": 2, "optimum": (0.0, 0.0)},
    "line":       {"make": lambda: LineFit(*LINE_SAMPLES),   "dim": 2, "optimum": (1.0, 0.0)},
    "circle":     {"make": lambda: CircleFit(*CIRCLE_SAMPLES), "dim": 3, "optimum": (0.0, 0.0, 1.0)},
}

# Distance to the known optimum below which a run counts as a success.
SUCCESS_THRESHOLDS = {
    "paraboloid": 1e-4,
    "line": 1e-3,
    "circle": 1e-3,
}
