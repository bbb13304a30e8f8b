"""
core/moves.py

Генерация и проверка ходов.

Ход — прыжок колышка через соседний колышек в пустую клетку за ним.
Недопустимый ход — это не ошибка: функции возвращают None.
"""

from typing import List, Optional, Tuple

from .geometry import Geometry
from .utils import NUM_DIRECTIONS

Move = Tuple[int, int, int]  # (from, jumped, to)


def try_move(geometry: Geometry, state: int, source: int, direction: int) -> Optional[int]:
    """
    Прыжок колышка source в направлении direction.

    Returns:
        Новое состояние или None, если ход невозможен
    """
    if not 0 <= source < geometry.size or not (state >> source) & 1:
        return None
    k = geometry.adj[source][direction]
    if k is None or not (state >> k) & 1:
        return None
    j = geometry.adj[k][direction]
    if j is None or (state >> j) & 1:
        return None
    return state ^ (1 << source) ^ (1 << k) ^ (1 << j)


def try_jump(geometry: Geometry, state: int, source: int, dest: int) -> Optional[int]:
    """
    Прыжок колышка source в клетку dest.

    Returns:
        Новое состояние или None, если ход невозможен
    """
    if not 0 <= source < geometry.size or not 0 <= dest < geometry.size:
        return None
    if not (state >> source) & 1 or (state >> dest) & 1:
        return None
    k = geometry.middle[source].get(dest)
    if k is None or not (state >> k) & 1:
        return None
    return state ^ (1 << source) ^ (1 << k) ^ (1 << dest)


def landing_cell(geometry: Geometry, source: int, direction: int) -> Optional[int]:
    """Клетка, куда попадёт колышек при прыжке из source в направлении direction."""
    k = geometry.adj[source][direction]
    if k is None:
        return None
    return geometry.adj[k][direction]


def get_moves(geometry: Geometry, state: int) -> List[Move]:
    """Все допустимые ходы: (from, jumped, to)."""
    moves: List[Move] = []
    for source in range(geometry.size):
        if not (state >> source) & 1:
            continue
        for d in range(NUM_DIRECTIONS):
            k = geometry.adj[source][d]
            if k is None or not (state >> k) & 1:
                continue
            j = geometry.adj[k][d]
            if j is not None and not (state >> j) & 1:
                moves.append((source, k, j))
    return moves


def apply_move(state: int, move: Move) -> int:
    """Применяет ход — O(1) XOR операции."""
    from_pos, jumped, to_pos = move
    return state ^ (1 << from_pos) ^ (1 << jumped) ^ (1 << to_pos)


def has_moves(geometry: Geometry, state: int) -> bool:
    """Есть ли хоть один допустимый ход."""
    for source in range(geometry.size):
        if (state >> source) & 1:
            for d in range(NUM_DIRECTIONS):
                if try_move(geometry, state, source, d) is not None:
                    return True
    return False
