"""
core - Ядро Peg Solitaire

Геометрия доски, битовое представление состояния и генерация ходов.
"""

from .geometry import Geometry, PRESETS, DEFAULT_PRESET, validate_template
from .bitboard import (
    popcount, has_peg, iter_pegs, from_cells, is_valid_state,
    start_state, to_string
)
from .moves import Move, try_move, try_jump, get_moves, apply_move, has_moves
from .utils import (
    DIRECTIONS, NUM_DIRECTIONS, NO_CELL, CELL, GOAL,
    PEG, HOLE, EMPTY, opposite, index_to_pos, pos_to_index
)

__all__ = [
    'Geometry', 'PRESETS', 'DEFAULT_PRESET', 'validate_template',
    'popcount', 'has_peg', 'iter_pegs', 'from_cells', 'is_valid_state',
    'start_state', 'to_string',
    'Move', 'try_move', 'try_jump', 'get_moves', 'apply_move', 'has_moves',
    'DIRECTIONS', 'NUM_DIRECTIONS', 'NO_CELL', 'CELL', 'GOAL',
    'PEG', 'HOLE', 'EMPTY', 'opposite', 'index_to_pos', 'pos_to_index',
]
