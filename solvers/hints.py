"""
solvers/hints.py

Подсказки: какие клетки участвуют в ходах, сохраняющих решаемость.

Без выбранного колышка подсказками являются колышки, которые стоит взять.
С выбранным колышком — пустые клетки, куда его стоит переставить.
"""

from typing import Callable, Optional, Set

from core.bitboard import has_peg, iter_pegs
from core.geometry import Geometry
from core.moves import try_move, landing_cell
from core.utils import NUM_DIRECTIONS

# Оракул: True/False, либо None если ответ ещё не известен
SolvableFn = Callable[[int], Optional[bool]]


def compute_hints(geometry: Geometry, state: int, solvable: SolvableFn,
                  active: Optional[int] = None, show_solution: bool = True) -> Set[int]:
    """
    Вычисляет подсказки для состояния.

    Args:
        geometry: геометрия доски
        state: текущее состояние
        solvable: оракул решаемости (неизвестный ответ = нет подсказки)
        active: выбранный колышек или None
        show_solution: режим показа решения; если выключен — подсказок нет

    Returns:
        Множество индексов клеток
    """
    hints: Set[int] = set()
    if not show_solution:
        return hints

    if active is None:
        for i in iter_pegs(state):
            for d in range(NUM_DIRECTIONS):
                next_state = try_move(geometry, state, i, d)
                if next_state is not None and solvable(next_state) is True:
                    hints.add(i)
                    break
    else:
        for d in range(NUM_DIRECTIONS):
            next_state = try_move(geometry, state, active, d)
            if next_state is not None and solvable(next_state) is True:
                hints.add(landing_cell(geometry, active, d))

    return hints


def legal_targets(geometry: Geometry, state: int, active: Optional[int]) -> Set[int]:
    """Пустые клетки, куда выбранный колышек может прыгнуть (без учёта решаемости)."""
    if active is None or not 0 <= active < geometry.size or not has_peg(state, active):
        return set()
    return {
        dest for dest, k in geometry.middle[active].items()
        if has_peg(state, k) and not has_peg(state, dest)
    }
