"""
solvers/solvability.py

Оракул решаемости: можно ли из данного состояния прийти к одному
колышку в целевой клетке.

DFS с мемоизацией. Каждый ход убирает ровно один колышек, поэтому граф
состояний ацикличен, а глубина рекурсии не превышает число колышков.
Результат для состояния — чистая функция от состояния и геометрии,
поэтому таблица мемоизации никогда не сбрасывается.
"""

import time
from itertools import combinations
from typing import Dict, List, Optional, Tuple

from .base import SolverStats
from core.bitboard import iter_pegs, is_valid_state, start_state
from core.geometry import Geometry
from core.moves import Move, try_move, get_moves, apply_move
from core.utils import NUM_DIRECTIONS
from utils.logging import get_logger


class SolvabilityEngine:
    """
    Решатель с таблицей мемоизации на всё время жизни процесса.

    Особенности:
    - memo: состояние → решаемо ли оно
    - memo заранее содержит целевое состояние (один колышек в цели)
    - поиск останавливается на первом ходе, ведущем к решаемому состоянию
    """

    def __init__(self, geometry: Geometry, verbose: bool = False):
        """
        Args:
            geometry: геометрия доски
            verbose: выводить отладочную информацию
        """
        self.geometry = geometry
        self.verbose = verbose
        self.memo: Dict[int, bool] = {geometry.goal_mask: True}
        self.stats = SolverStats()
        self.logger = get_logger()

    def is_solvable(self, state: int) -> bool:
        """
        Решаемо ли состояние.

        Состояния вне диапазона (0, 2^N) считаются нерешаемыми.
        """
        self.stats.queries += 1
        if not is_valid_state(self.geometry, state):
            return False

        cached = self.memo.get(state)
        if cached is not None:
            self.stats.memo_hits += 1
            return cached

        start = time.perf_counter()
        evaluated = self.stats.states_evaluated
        result = self._solve(state)
        elapsed = time.perf_counter() - start
        self.stats.time_elapsed += elapsed

        self._log(
            f"{state:#x}: {'решаемо' if result else 'нерешаемо'}, "
            f"новых состояний {self.stats.states_evaluated - evaluated}, "
            f"memo {len(self.memo)}, {elapsed:.3f}с"
        )
        return result

    def _solve(self, state: int) -> bool:
        cached = self.memo.get(state)
        if cached is not None:
            return cached

        self.stats.states_evaluated += 1
        geometry = self.geometry
        result = False

        # Один колышек не в цели — тупик; целевое состояние уже в memo
        if state & (state - 1):
            for i in iter_pegs(state):
                for d in range(NUM_DIRECTIONS):
                    next_state = try_move(geometry, state, i, d)
                    if next_state is not None and self._solve(next_state):
                        result = True
                        break
                if result:
                    break

        self.memo[state] = result
        return result

    def solvable_moves(self, state: int) -> List[Move]:
        """Все ходы, после которых состояние остаётся решаемым."""
        return [
            move for move in get_moves(self.geometry, state)
            if self.is_solvable(apply_move(state, move))
        ]

    def witness(self, state: int) -> Optional[Move]:
        """
        Первый ход (в порядке обхода клеток и направлений),
        сохраняющий решаемость, или None.
        """
        if not is_valid_state(self.geometry, state):
            return None
        for move in get_moves(self.geometry, state):
            if self.is_solvable(apply_move(state, move)):
                return move
        return None

    def solvable_starts(self) -> Dict[int, bool]:
        """Для каждой клетки: решаема ли полная доска без колышка в ней."""
        return {
            cell: self.is_solvable(start_state(self.geometry, cell))
            for cell in range(self.geometry.size)
        }

    def count_solvable(self, max_cells: int = 20) -> Tuple[int, int]:
        """
        Считает решаемые и нерешаемые непустые состояния всей доски.

        Состояния обрабатываются снизу вверх по числу колышков, без рекурсии,
        в отдельной таблице (memo не заполняется).

        Returns:
            (решаемых, нерешаемых)

        Raises:
            ValueError: доска больше max_cells клеток
        """
        geometry = self.geometry
        n = geometry.size
        if n > max_cells:
            raise ValueError(
                f"Полный перебор для {n} клеток слишком велик (максимум {max_cells})"
            )

        start = time.perf_counter()
        table = bytearray(1 << n)
        table[geometry.goal_mask] = 1
        solvable = 1

        for pegs in range(2, n + 1):
            for cells in combinations(range(n), pegs):
                state = 0
                for cell in cells:
                    state |= 1 << cell
                for move in get_moves(geometry, state):
                    if table[apply_move(state, move)]:
                        table[state] = 1
                        solvable += 1
                        break

        total = (1 << n) - 1
        self._log(
            f"Перебор {n} клеток: решаемых {solvable}, нерешаемых {total - solvable}, "
            f"{time.perf_counter() - start:.3f}с"
        )
        return solvable, total - solvable

    def _log(self, message: str) -> None:
        if self.verbose:
            self.logger.info(f"[{self.__class__.__name__}] {message}")
        else:
            self.logger.debug(f"[{self.__class__.__name__}] {message}")


# Один решатель на геометрию: memo — чистый кэш и его можно разделять
_engines: Dict[Geometry, SolvabilityEngine] = {}


def get_engine(geometry: Geometry) -> SolvabilityEngine:
    """Возвращает общий решатель для геометрии, создавая его при первом обращении."""
    engine = _engines.get(geometry)
    if engine is None:
        engine = SolvabilityEngine(geometry)
        _engines[geometry] = engine
    return engine
