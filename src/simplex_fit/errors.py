"""Exceptions raised by the simplex optimizer and the objective functions."""


class ConfigurationError(ValueError):
    """Invalid run setup: bad dimensions, budget, tolerances or step sizes."""


class NumericError(ArithmeticError):
    """The objective produced NaN/inf (or nothing usable) at a required point."""
