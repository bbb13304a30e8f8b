"""
solvers/base.py

Статистика работы решателя.
"""

from dataclasses import dataclass


@dataclass
class SolverStats:
    """Статистика работы решателя."""
    queries: int = 0
    memo_hits: int = 0
    states_evaluated: int = 0
    time_elapsed: float = 0.0

    def __str__(self) -> str:
        return (
            f"Queries: {self.queries}, "
            f"Memo hits: {self.memo_hits}, "
            f"Evaluated: {self.states_evaluated}, "
            f"Time: {self.time_elapsed:.3f}s"
        )
