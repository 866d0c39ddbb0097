import numpy as np


class Simplex:
    """N+1 vertices in N-dimensional space, each paired with its objective value.

    Vertices are rows of `points` (shape (N+1, N)); `values[i]` belongs to row i.
    After `order()` row 0 is the best vertex and the last row the worst.
    """

    def __init__(self, points: np.ndarray, values: np.ndarray):
        points = np.asarray(points, dtype=float)
        values = np.asarray(values, dtype=float)
        if points.ndim != 2 or points.shape[0] != points.shape[1] + 1:
            raise ValueError(f"A simplex needs N+1 points of dimension N, got shape {points.shape}.")
        if values.shape != (points.shape[0],):
            raise ValueError("Exactly one value per vertex is required.")
        self.points = points.copy()
        self.values = values.copy()

    @property
    def dim(self) -> int:
        return self.points.shape[1]

    def order(self) -> None:
        """Sort vertices by value, best first (stable, so ties keep their order)."""
        idx = np.argsort(self.values, kind="stable")
        self.points = self.points[idx]
        self.values = self.values[idx]

    def best(self):
        return self.points[0], float(self.values[0])

    def worst(self):
        return self.points[-1], float(self.values[-1])

    def second_worst_value(self) -> float:
        return float(self.values[-2])

    def centroid(self) -> np.ndarray:
        """Centroid of every vertex except the worst."""
        return self.points[:-1].mean(axis=0)

    def replace_worst(self, point: np.ndarray, value: float) -> None:
        self.points[-1] = point
        self.values[-1] = value

    def replace_all_but_best(self, points: np.ndarray, values: np.ndarray) -> None:
        self.points[1:] = points
        self.values[1:] = values

    def __len__(self) -> int:
        return self.points.shape[0]

    def __repr__(self):
        return f"Simplex(dim={self.dim}, best={self.values.min():.6g}, worst={self.values.max():.6g})"
