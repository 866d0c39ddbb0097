from .evaluator import Evaluator, BudgetExhausted
from .simplex import Simplex

__all__ = ["Evaluator", "BudgetExhausted", "Simplex"]
