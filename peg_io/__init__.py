"""
peg_io - Ввод/вывод для Peg Solitaire

Экспортирует:
- Парсинг шаблонов доски и обозначений клеток
- Визуализация доски
"""

from .parser import parse_template, load_template, parse_cell, parse_pegs
from .visualizer import display_board, format_move, format_moves, LEGEND

__all__ = [
    'parse_template',
    'load_template',
    'parse_cell',
    'parse_pegs',
    'display_board',
    'format_move',
    'format_moves',
    'LEGEND',
]
