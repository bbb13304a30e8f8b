"""
game/session.py

Игровая сессия: текущее состояние, история отмены/повтора и выбранный колышек.

Две фазы:
- Setup: доска в начальном состоянии, нужно убрать один колышек;
- In-Progress: после первого хода, колышки прыгают друг через друга.

Недопустимые действия ничего не меняют и возвращают False.
"""

from typing import Any, Dict, List, Optional, Sequence, Set, Union

from core.bitboard import has_peg, popcount
from core.geometry import Geometry
from core.moves import try_jump, has_moves
from peg_io.parser import parse_template
from solvers.hints import SolvableFn, compute_hints, legal_targets
from solvers.solvability import SolvabilityEngine, get_engine
from utils.logging import get_logger


class GameSession:
    """Состояние одной партии."""

    def __init__(self, geometry: Geometry, engine: Optional[SolvabilityEngine] = None,
                 solvable: Optional[SolvableFn] = None, initial_state: Optional[int] = None):
        """
        Args:
            geometry: геометрия доски
            engine: решатель (по умолчанию общий для геометрии)
            solvable: оракул для подсказок (по умолчанию engine.is_solvable)
            initial_state: начальное состояние (по умолчанию все клетки заняты)
        """
        self.geometry = geometry
        self.engine = engine or get_engine(geometry)
        self.solvable: SolvableFn = solvable or self.engine.is_solvable
        self.initial_state = geometry.full_mask if initial_state is None else initial_state
        self.state = self.initial_state
        self.undo_stack: List[int] = []
        self.redo_stack: List[int] = []
        self.active_cell: Optional[int] = None
        self.logger = get_logger()

    # --- Запросы ---

    def current_state(self) -> int:
        return self.state

    def is_in_setup(self) -> bool:
        return self.state == self.initial_state

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def can_reset(self) -> bool:
        return self.state != self.initial_state

    def peg_at(self, cell: int) -> bool:
        return 0 <= cell < self.geometry.size and has_peg(self.state, cell)

    def goal_cell(self) -> int:
        return self.geometry.goal

    def peg_count(self) -> int:
        return popcount(self.state)

    def is_won(self) -> bool:
        return self.state == self.geometry.goal_mask

    def is_stuck(self) -> bool:
        """Ходов нет, а цель не достигнута."""
        return not self.is_in_setup() and not self.is_won() and not has_moves(self.geometry, self.state)

    def is_solvable(self) -> bool:
        return self.engine.is_solvable(self.state)

    # --- Изменение состояния ---

    def remove_peg(self, cell: int) -> bool:
        """Убирает начальный колышек (только в фазе Setup)."""
        if not self.is_in_setup() or not self.peg_at(cell):
            return False
        self._commit(self.state ^ (1 << cell), f"remove {self.geometry.label(cell)}")
        return True

    def move(self, source: int, dest: int) -> bool:
        """Прыжок колышка source в клетку dest."""
        if self.is_in_setup():
            return False
        next_state = try_jump(self.geometry, self.state, source, dest)
        if next_state is None:
            return False
        self._commit(
            next_state,
            f"move {self.geometry.label(source)} → {self.geometry.label(dest)}"
        )
        return True

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        self.redo_stack.append(self.state)
        self.state = self.undo_stack.pop()
        self.active_cell = None
        self.logger.debug(f"undo: {popcount(self.state)} колышков")
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        self.undo_stack.append(self.state)
        self.state = self.redo_stack.pop()
        self.active_cell = None
        self.logger.debug(f"redo: {popcount(self.state)} колышков")
        return True

    def reset(self) -> None:
        self.state = self.initial_state
        self.undo_stack.clear()
        self.redo_stack.clear()
        self.active_cell = None
        self.logger.debug("reset")

    def _commit(self, new_state: int, description: str) -> None:
        self.undo_stack.append(self.state)
        self.redo_stack.clear()
        self.state = new_state
        self.active_cell = None
        self.logger.debug(f"{description}: {popcount(new_state)} колышков")

    # --- Выбор колышка ---

    def set_active_cell(self, cell: int) -> bool:
        """Выбирает колышек для хода (только после фазы Setup)."""
        if self.is_in_setup() or not self.peg_at(cell):
            return False
        self.active_cell = cell
        return True

    def clear_active_cell(self) -> None:
        self.active_cell = None

    def click(self, cell: int) -> bool:
        """
        Обработка клика по клетке.

        В фазе Setup клик по колышку убирает его. Далее клик по колышку
        выбирает его (повторный клик снимает выбор), а клик по пустой
        клетке при выбранном колышке пытается сделать ход.

        Returns:
            True, если что-то изменилось
        """
        if not 0 <= cell < self.geometry.size:
            return False
        if self.is_in_setup():
            return self.remove_peg(cell)
        if self.peg_at(cell):
            if self.active_cell == cell:
                self.clear_active_cell()
                return True
            return self.set_active_cell(cell)
        if self.active_cell is not None:
            return self.move(self.active_cell, cell)
        return False

    # --- Подсказки ---

    def compute_hints(self, show_solution: bool, active_cell: Optional[int] = None) -> Set[int]:
        """Подсказки для текущего состояния и заданного выбранного колышка."""
        return compute_hints(self.geometry, self.state, self.solvable,
                             active=active_cell, show_solution=show_solution)

    def hints(self, show_solution: bool) -> Set[int]:
        """Подсказки с учётом текущего выбранного колышка."""
        return self.compute_hints(show_solution, self.active_cell)

    def targets(self) -> Set[int]:
        """Клетки, куда может прыгнуть выбранный колышек."""
        return legal_targets(self.geometry, self.state, self.active_cell)

    # --- Сохранение ---

    def snapshot(self) -> Dict[str, Any]:
        """Состояние сессии в виде JSON-совместимого словаря."""
        return {
            'state': self.state,
            'initial': self.initial_state,
            'undo': list(self.undo_stack),
            'redo': list(self.redo_stack),
            'active': self.active_cell,
        }

    @classmethod
    def from_snapshot(cls, geometry: Geometry, data: Dict[str, Any],
                      solvable: Optional[SolvableFn] = None) -> 'GameSession':
        """Восстанавливает сессию из snapshot()."""
        session = cls(geometry, solvable=solvable, initial_state=int(data['initial']))
        session.state = int(data['state'])
        session.undo_stack = [int(s) for s in data.get('undo', [])]
        session.redo_stack = [int(s) for s in data.get('redo', [])]
        active = data.get('active')
        session.active_cell = None if active is None else int(active)
        return session

    def __repr__(self) -> str:
        phase = 'setup' if self.is_in_setup() else 'in-progress'
        return f"GameSession({popcount(self.state)} pegs, {phase})"


def initialize(template: Union[str, Sequence[str]], require_goal: bool = False) -> GameSession:
    """
    Создаёт геометрию и новую сессию по текстовому шаблону.

    Raises:
        InvalidGeometryError: некорректный шаблон
    """
    return GameSession(Geometry(parse_template(template), require_goal=require_goal))
