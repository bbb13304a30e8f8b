"""
core/geometry.py

Геометрия доски: клетки, соседство по 8 направлениям и таблица
"средних" клеток для прыжков.

Геометрия строится один раз по текстовому шаблону и дальше не меняется.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .utils import DIRECTIONS, NO_CELL, GOAL, TEMPLATE_SYMBOLS, index_to_pos
from utils.error_handling import InvalidGeometryError
from utils.logging import get_logger

Position = Tuple[int, int]

# Классическая английская доска (33 клетки), цель в центре
ENGLISH_TEMPLATE = (
    "  ...  ",
    "  ...  ",
    ".......",
    "...,...",
    ".......",
    "  ...  ",
    "  ...  ",
)

# Доска-стрелка из 25 клеток
ARROW_TEMPLATE = (
    "     . ",
    "    ...",
    "...... ",
    "....,  ",
    "...... ",
    "    ...",
    "     . ",
)

# Маленький крест из 5 клеток (нерешаем ни из какой стартовой позиции)
PLUS_TEMPLATE = (
    " . ",
    ".,.",
    " . ",
)

PRESETS: Dict[str, Tuple[str, ...]] = {
    'english': ENGLISH_TEMPLATE,
    'arrow': ARROW_TEMPLATE,
    'plus': PLUS_TEMPLATE,
}

DEFAULT_PRESET = 'arrow'


def validate_template(template: Sequence[str]) -> Tuple[int, int]:
    """
    Проверяет шаблон доски.

    Args:
        template: строки шаблона

    Returns:
        (rows, cols)

    Raises:
        InvalidGeometryError: пустой, не прямоугольный шаблон или неизвестный символ
    """
    if not template:
        raise InvalidGeometryError("Шаблон доски пуст")

    cols = len(template[0])
    if cols == 0:
        raise InvalidGeometryError("Шаблон доски пуст")

    for r, row in enumerate(template):
        if len(row) != cols:
            raise InvalidGeometryError(
                f"Шаблон не прямоугольный: строка {r + 1} имеет длину {len(row)}, ожидалось {cols}"
            )
        for c, ch in enumerate(row):
            if ch not in TEMPLATE_SYMBOLS:
                raise InvalidGeometryError(
                    f"Неизвестный символ {ch!r} в позиции {index_to_pos(r, c)}"
                )

    return len(template), cols


def _central_cell(cells: List[Position], rows: int, cols: int) -> int:
    """Клетка, ближайшая к центру сетки (первая по порядку при равенстве)."""
    cr, cc = (rows - 1) / 2, (cols - 1) / 2
    return min(
        range(len(cells)),
        key=lambda i: (abs(cells[i][0] - cr) + abs(cells[i][1] - cc), i)
    )


class Geometry:
    """
    Геометрия доски.

    Клетки нумеруются в порядке обхода шаблона по строкам.
    adj[i][d] — сосед клетки i в направлении d (или None),
    middle[i][j] — клетка между i и j, если из i в j можно прыгнуть.
    """
    __slots__ = ('template', 'rows', 'cols', 'cells', 'index',
                 'adj', 'middle', 'goal', 'size', 'full_mask', 'goal_mask')

    def __init__(self, template: Sequence[str], require_goal: bool = False):
        self.template = tuple(template)
        self.rows, self.cols = validate_template(self.template)

        self.cells: List[Position] = []
        self.index: Dict[Position, int] = {}
        goal: Optional[int] = None

        for r, row in enumerate(self.template):
            for c, ch in enumerate(row):
                if ch == NO_CELL:
                    continue
                if ch == GOAL:
                    if goal is not None:
                        raise InvalidGeometryError(
                            f"Несколько целевых клеток: {self.label(goal)} и {index_to_pos(r, c)}"
                        )
                    goal = len(self.cells)
                self.index[(r, c)] = len(self.cells)
                self.cells.append((r, c))

        if not self.cells:
            raise InvalidGeometryError("Шаблон не содержит ни одной клетки")

        if goal is None:
            if require_goal:
                raise InvalidGeometryError("Шаблон не содержит целевой клетки")
            goal = _central_cell(self.cells, self.rows, self.cols)

        self.goal = goal
        self.size = len(self.cells)
        self.full_mask = (1 << self.size) - 1
        self.goal_mask = 1 << goal

        # Соседи: выход за границы шаблона просто не находится в index
        self.adj: List[Tuple[Optional[int], ...]] = [
            tuple(self.index.get((r + dr, c + dc)) for dr, dc in DIRECTIONS)
            for r, c in self.cells
        ]

        # Прыжок i -> j через k выводится из двух шагов в одном направлении
        self.middle: List[Dict[int, int]] = []
        for i in range(self.size):
            jumps: Dict[int, int] = {}
            for d in range(len(DIRECTIONS)):
                k = self.adj[i][d]
                if k is not None:
                    j = self.adj[k][d]
                    if j is not None:
                        jumps[j] = k
            self.middle.append(jumps)

        get_logger().info(
            f"Геометрия: {self.size} клеток, {self.rows}x{self.cols}, цель {self.label(goal)}"
        )

    @classmethod
    def from_preset(cls, name: str) -> 'Geometry':
        """Создаёт геометрию по имени встроенного шаблона."""
        try:
            template = PRESETS[name]
        except KeyError:
            raise InvalidGeometryError(
                f"Неизвестная доска {name!r}, доступны: {', '.join(sorted(PRESETS))}"
            ) from None
        return cls(template)

    def neighbor(self, cell: int, direction: int) -> Optional[int]:
        return self.adj[cell][direction]

    def middle_of(self, source: int, dest: int) -> Optional[int]:
        """Клетка, через которую прыгают из source в dest, или None."""
        return self.middle[source].get(dest)

    def cell_at(self, row: int, col: int) -> Optional[int]:
        return self.index.get((row, col))

    def coords(self, cell: int) -> Position:
        return self.cells[cell]

    def label(self, cell: int) -> str:
        """Шахматная нотация клетки (A1, B2, ...)."""
        return index_to_pos(*self.cells[cell])

    def __hash__(self) -> int:
        return hash((self.template, self.goal))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Geometry):
            return False
        return self.template == other.template and self.goal == other.goal

    def __repr__(self) -> str:
        return f"Geometry({self.size} cells, goal={self.label(self.goal)})"
