"""
peg_io/visualizer.py

Визуализация доски, подсказок и ходов.
"""

from typing import Iterable, List, Optional

from core.bitboard import has_peg
from core.geometry import Geometry
from core.moves import Move
from core.utils import PEG, HOLE, EMPTY

ACTIVE = '◉'       # Выбранный колышек
HINT_PEG = '◆'     # Колышек, которым стоит ходить
HINT_HOLE = '◇'    # Клетка, куда стоит прыгнуть
TARGET = '◌'       # Клетка, куда можно прыгнуть
GOAL_HOLE = '⊙'    # Пустая целевая клетка

LEGEND = (
    f"{PEG} колышек  {HOLE} пусто  {GOAL_HOLE} цель  {ACTIVE} выбран  "
    f"{HINT_PEG}/{HINT_HOLE} подсказка  {TARGET} можно прыгнуть"
)


def display_board(geometry: Geometry, state: int, hints: Iterable[int] = (),
                  active: Optional[int] = None, targets: Iterable[int] = ()) -> str:
    """
    Красиво форматирует текстовое представление доски.

    Args:
        geometry: геометрия доски
        state: состояние
        hints: клетки-подсказки
        active: выбранный колышек
        targets: клетки, куда может прыгнуть выбранный колышек

    Returns:
        Строка для вывода
    """
    hints = set(hints)
    targets = set(targets)

    header = "   " + " ".join(chr(c + ord('A')) for c in range(geometry.cols))
    lines = [header]

    for r in range(geometry.rows):
        row = []
        for c in range(geometry.cols):
            cell = geometry.cell_at(r, c)
            if cell is None:
                row.append(EMPTY)
            elif has_peg(state, cell):
                if cell == active:
                    row.append(ACTIVE)
                elif cell in hints:
                    row.append(HINT_PEG)
                else:
                    row.append(PEG)
            elif cell in hints:
                row.append(HINT_HOLE)
            elif cell in targets:
                row.append(TARGET)
            elif cell == geometry.goal:
                row.append(GOAL_HOLE)
            else:
                row.append(HOLE)
        lines.append(f"{r + 1:<2} " + " ".join(row).rstrip())

    return "\n".join(lines)


def format_move(geometry: Geometry, move: Move) -> str:
    """Форматирует ход для вывода."""
    from_pos, _, to_pos = move
    return f"{geometry.label(from_pos)} → {geometry.label(to_pos)}"


def format_moves(geometry: Geometry, moves: Iterable[Move]) -> List[str]:
    """Форматирует список ходов."""
    return [format_move(geometry, move) for move in moves]
