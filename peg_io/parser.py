"""
peg_io/parser.py

Парсинг шаблонов доски и обозначений клеток.
"""

import re
from typing import List, Sequence, Union

from core.geometry import Geometry, validate_template
from core.utils import pos_to_index
from utils.error_handling import InvalidCellError

_LABEL_RE = re.compile(r'^[A-Za-z]\d+$')


def parse_template(template: Union[str, Sequence[str]]) -> List[str]:
    """
    Приводит шаблон к списку строк и проверяет его.

    Пустые строки в начале и в конце текста отбрасываются, пробелы внутри
    строк значимы (это отсутствующие клетки).

    Raises:
        InvalidGeometryError: пустой или не прямоугольный шаблон
    """
    if isinstance(template, str):
        rows = template.split('\n')
    else:
        rows = list(template)
    rows = [row.rstrip('\r') for row in rows]

    while rows and not rows[0]:
        rows.pop(0)
    while rows and not rows[-1]:
        rows.pop()

    validate_template(rows)
    return rows


def load_template(path: str) -> List[str]:
    """Читает шаблон из файла."""
    with open(path, 'r', encoding='utf-8') as f:
        return parse_template(f.read())


def parse_cell(text: str, geometry: Geometry) -> int:
    """
    Клетка по обозначению: шахматная нотация (D4) или индекс (17).

    Raises:
        InvalidCellError: нет такой клетки
    """
    text = text.strip()
    if text.isdigit():
        cell = int(text)
        if cell < geometry.size:
            return cell
        raise InvalidCellError(f"Нет клетки с индексом {cell} (всего {geometry.size})")

    if not _LABEL_RE.match(text):
        raise InvalidCellError(f"Неверное обозначение клетки: {text!r}")

    cell = geometry.cell_at(*pos_to_index(text))
    if cell is None:
        raise InvalidCellError(f"Клетки {text.upper()} нет на доске")
    return cell


def parse_pegs(text: str, geometry: Geometry) -> int:
    """
    Состояние по списку клеток с колышками.

    Формат: "A3 C1 D4" или "A3,C1,D4"
    """
    state = 0
    for token in re.split(r'[\s,]+', text.strip()):
        if token:
            state |= 1 << parse_cell(token, geometry)
    return state
