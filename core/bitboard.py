"""
core/bitboard.py

Представление состояния доски через битовую маску.
Бит i установлен — в клетке i есть колышек. Всё состояние — один int.
"""

from typing import Iterable, Iterator

from .geometry import Geometry

PEG_CHAR = 'o'


def popcount(state: int) -> int:
    """Количество колышков."""
    return state.bit_count()


def has_peg(state: int, cell: int) -> bool:
    return (state >> cell) & 1 == 1


def iter_pegs(state: int) -> Iterator[int]:
    """Индексы клеток с колышками по возрастанию."""
    while state:
        low = state & -state
        yield low.bit_length() - 1
        state ^= low


def from_cells(cells: Iterable[int]) -> int:
    """Маска из списка клеток с колышками."""
    state = 0
    for cell in cells:
        state |= 1 << cell
    return state


def is_valid_state(geometry: Geometry, state: int) -> bool:
    """Маска непустая и не выходит за пределы доски."""
    return 0 < state <= geometry.full_mask


def start_state(geometry: Geometry, removed: int) -> int:
    """Полная доска без одного колышка."""
    return geometry.full_mask ^ (1 << removed)


def to_string(geometry: Geometry, state: int) -> str:
    """
    Текстовое представление состояния.

    Колышек — 'o', пустая клетка — символ шаблона ('.' или ','),
    отсутствующая клетка — пробел.
    """
    lines = []
    for r, row in enumerate(geometry.template):
        line = ""
        for c, ch in enumerate(row):
            cell = geometry.cell_at(r, c)
            if cell is None:
                line += ' '
            elif has_peg(state, cell):
                line += PEG_CHAR
            else:
                line += ch
        lines.append(line.rstrip())
    return "\n".join(lines)
