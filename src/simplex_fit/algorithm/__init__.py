"""Nelder-Mead simplex optimizer: entry point, parameters and phases."""

from .config import NelderMeadParams, StoppingCriteria
from .nelder_mead import OptimizationResult, optimize

__all__ = ["NelderMeadParams", "StoppingCriteria", "OptimizationResult", "optimize"]
