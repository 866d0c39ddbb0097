"""Move phase: one Nelder-Mead iteration on an ordered simplex.

Candidate points are always built relative to the centroid `c` of every
vertex but the worst:

- reflection  xr = c + alpha * (c - worst)
- expansion   xe = c + gamma * (xr - c)
- contraction xc = c + rho * (worst - c)
- shrink      v  = best + sigma * (v - best) for every non-best vertex

Returns the name of the accepted move. The simplex is only modified after
the evaluations a move needs have all succeeded, except that an already
evaluated improving reflection is kept when the budget runs out during
expansion.
"""
from typing import Callable

import numpy as np

from simplex_fit.algorithm.components.evaluator import BudgetExhausted
from simplex_fit.algorithm.components.simplex import Simplex
from simplex_fit.algorithm.config import NelderMeadParams

REFLECT = "reflect"
EXPAND = "expand"
CONTRACT = "contract"
SHRINK = "shrink"


def reflect(c: np.ndarray, worst: np.ndarray, alpha: float) -> np.ndarray:
    return c + alpha * (c - worst)


def expand(c: np.ndarray, reflected: np.ndarray, gamma: float) -> np.ndarray:
    return c + gamma * (reflected - c)


def contract(c: np.ndarray, worst: np.ndarray, rho: float) -> np.ndarray:
    return c + rho * (worst - c)


def shrink(best: np.ndarray, others: np.ndarray, sigma: float) -> np.ndarray:
    return best + sigma * (others - best)


def move_phase(simplex: Simplex, evaluate: Callable[[np.ndarray], float], params: NelderMeadParams) -> str:
    best_x, best_f = simplex.best()
    worst_x, worst_f = simplex.worst()
    second_worst_f = simplex.second_worst_value()
    c = simplex.centroid()

    # Reflection
    xr = reflect(c, worst_x, params.alpha)
    fr = evaluate(xr)
    if best_f <= fr < second_worst_f:
        simplex.replace_worst(xr, fr)
        return REFLECT

    # Expansion
    if fr < best_f:
        xe = expand(c, xr, params.gamma)
        try:
            fe = evaluate(xe)
        except BudgetExhausted:
            # xr already beats the best vertex; keep it before giving up
            simplex.replace_worst(xr, fr)
            raise
        if fe < fr:
            simplex.replace_worst(xe, fe)
            return EXPAND
        simplex.replace_worst(xr, fr)
        return REFLECT

    # Contraction
    xc = contract(c, worst_x, params.rho)
    fc = evaluate(xc)
    if fc < worst_f:
        simplex.replace_worst(xc, fc)
        return CONTRACT

    # Shrink
    shrunk = shrink(best_x, simplex.points[1:], params.sigma)
    values = np.array([evaluate(v) for v in shrunk], dtype=float)
    simplex.replace_all_but_best(shrunk, values)
    return SHRINK
