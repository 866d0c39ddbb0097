from __future__ import annotations
from dataclasses import dataclass
from math import isfinite
from numbers import Integral, Real
from typing import Sequence, Union

from simplex_fit.algorithm import constants
from simplex_fit.errors import ConfigurationError

"""
Dataclass definitions for the simplex coefficients and the stopping rules.

Defaults reproduce the demonstration runs (standard Nelder-Mead
coefficients, unit initial step, rel 1e-10 / abs 1e-30, 10k evaluations).
Named presets for the stopping rules live in `constants.py`.
"""


def _require_finite(name: str, value: float) -> None:
    if not isinstance(value, Real) or isinstance(value, bool) or not isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}.")


@dataclass(frozen=True)
class NelderMeadParams:
    alpha: float = constants.ALPHA
    gamma: float = constants.GAMMA
    rho: float = constants.RHO
    sigma: float = constants.SIGMA
    step: Union[float, Sequence[float]] = constants.INITIAL_STEP

    def __post_init__(self):
        for name in ("alpha", "gamma", "rho", "sigma"):
            _require_finite(name, getattr(self, name))
        if self.alpha <= 0:
            raise ConfigurationError("alpha must be > 0.")
        if self.gamma <= self.alpha:
            raise ConfigurationError("gamma must be greater than alpha.")
        if not 0 < self.rho < 1:
            raise ConfigurationError("rho must lie in (0, 1).")
        if not 0 < self.sigma < 1:
            raise ConfigurationError("sigma must lie in (0, 1).")

        if isinstance(self.step, Real) and not isinstance(self.step, bool):
            _require_finite("step", self.step)
            object.__setattr__(self, "step", float(self.step))
        else:
            steps = tuple(self.step)
            if not steps:
                raise ConfigurationError("step sequence must not be empty.")
            for s in steps:
                _require_finite("step", s)
            object.__setattr__(self, "step", tuple(float(s) for s in steps))

    def steps_for(self, dim: int) -> tuple[float, ...]:
        """Per-axis initial displacements for an N-dimensional guess."""
        if isinstance(self.step, float):
            return (self.step,) * dim
        if len(self.step) != dim:
            raise ConfigurationError(
                f"step has {len(self.step)} entries but the initial guess has {dim}."
            )
        return self.step


@dataclass(frozen=True)
class StoppingCriteria:
    rel_tol: float = constants.REL_TOL
    abs_tol: float = constants.ABS_TOL
    max_evaluations: int = constants.MAX_EVALUATIONS

    def __post_init__(self):
        _require_finite("rel_tol", self.rel_tol)
        _require_finite("abs_tol", self.abs_tol)
        if self.rel_tol < 0 or self.abs_tol < 0:
            raise ConfigurationError("Tolerances must be >= 0.")
        if not isinstance(self.max_evaluations, Integral) or isinstance(self.max_evaluations, bool):
            raise ConfigurationError(
                f"max_evaluations must be an int, got {self.max_evaluations!r}."
            )
        if self.max_evaluations <= 0:
            raise ConfigurationError("max_evaluations must be > 0.")
        object.__setattr__(self, "max_evaluations", int(self.max_evaluations))

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "StoppingCriteria":
        """Build criteria from a named preset; `None` overrides are ignored."""
        key = name.upper()
        if key not in constants.PRESETS:
            valid = ", ".join(sorted(constants.PRESETS))
            raise ConfigurationError(f"Unknown preset '{name}'. Choose from: {valid}.")
        d = dict(constants.PRESETS[key])
        d.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**d)
