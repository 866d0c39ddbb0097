"""Phases of one Nelder-Mead run: initialize, move, convergence check."""

from .initialize import initialize_phase
from .moves import move_phase
from .convergence import convergence_phase

__all__ = ["initialize_phase", "move_phase", "convergence_phase"]
