from .run_logger import ITERATION_FIELDS, RunLogger

__all__ = ["ITERATION_FIELDS", "RunLogger"]
