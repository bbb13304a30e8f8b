"""
core/utils.py

Общие утилиты и константы для Peg Solitaire.
"""

from typing import List, Tuple

# Направления движения (dr, dc). Противоположные направления идут парами:
# 0/1 вверх/вниз, 2/3 влево/вправо, 4/5 и 6/7 — диагонали.
DIRECTIONS: List[Tuple[int, int]] = [
    (-1, 0), (1, 0),
    (0, -1), (0, 1),
    (-1, -1), (1, 1),
    (-1, 1), (1, -1),
]

NUM_DIRECTIONS = len(DIRECTIONS)

# Символы шаблона доски
NO_CELL = ' '   # Клетки нет
CELL = '.'      # Обычная клетка
GOAL = ','      # Целевая клетка (здесь должен остаться последний колышек)
TEMPLATE_SYMBOLS = frozenset((NO_CELL, CELL, GOAL))

# Символы для отображения
PEG = '●'       # Колышек
HOLE = '○'      # Пустое место (можно прыгнуть)
EMPTY = ' '     # Недоступная клетка


def opposite(direction: int) -> int:
    """Противоположное направление."""
    return direction ^ 1


def index_to_pos(row: int, col: int) -> str:
    """Индекс (row, col) → шахматная нотация (A1, B2, ...)."""
    return f"{chr(col + ord('A'))}{row + 1}"


def pos_to_index(pos: str) -> Tuple[int, int]:
    """Шахматная нотация → индекс."""
    col = ord(pos[0].upper()) - ord('A')
    row = int(pos[1:]) - 1
    return row, col
