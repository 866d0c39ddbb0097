"""Derivative-free Nelder-Mead minimization with paraboloid, line-fit and circle-fit examples."""

from simplex_fit.algorithm import NelderMeadParams, OptimizationResult, StoppingCriteria, optimize
from simplex_fit.algorithm.constants import MAXIMIZE, MINIMIZE
from simplex_fit.errors import ConfigurationError, NumericError
from simplex_fit.functions import PROBLEMS, CircleFit, LineFit, Paraboloid
from simplex_fit.logging import RunLogger
from simplex_fit.utils import random_initial_guess

__version__ = "0.1.0"

__all__ = [
    "optimize",
    "OptimizationResult",
    "StoppingCriteria",
    "NelderMeadParams",
    "MINIMIZE",
    "MAXIMIZE",
    "ConfigurationError",
    "NumericError",
    "Paraboloid",
    "LineFit",
    "CircleFit",
    "PROBLEMS",
    "RunLogger",
    "random_initial_guess",
]
