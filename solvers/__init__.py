"""
solvers - Оракул решаемости и подсказки

Экспортирует:
- SolvabilityEngine: DFS с мемоизацией (решаемо ли состояние)
- get_engine: общий решатель для геометрии
- SolverWorker: тот же решатель в фоновом потоке
- compute_hints, legal_targets: подсказки для интерфейса
"""

from .base import SolverStats
from .solvability import SolvabilityEngine, get_engine
from .worker import SolverWorker
from .hints import compute_hints, legal_targets

__all__ = [
    'SolverStats',
    'SolvabilityEngine',
    'get_engine',
    'SolverWorker',
    'compute_hints',
    'legal_targets',
]
