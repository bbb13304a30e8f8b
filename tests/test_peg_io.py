"""
tests/test_peg_io.py

Тесты парсинга шаблонов/клеток и текстовой визуализации.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from core.geometry import Geometry, PRESETS
from peg_io.parser import parse_template, load_template, parse_cell, parse_pegs
from peg_io.visualizer import display_board, format_move, format_moves
from utils.error_handling import InvalidGeometryError, InvalidCellError


@pytest.fixture
def english():
    return Geometry(PRESETS['english'])


def test_parse_template_text():
    """Крайние пустые строки отбрасываются, пробелы в строках сохраняются."""
    assert parse_template("\n .\n..\n\n") == [" .", ".."]
    assert parse_template("..\r\n.,\r\n") == ["..", ".,"]
    assert parse_template(["..,"]) == ["..,"]


@pytest.mark.parametrize("text", ["", "\n", "..\n.", ". \n.", "abc"])
def test_parse_template_invalid(text):
    with pytest.raises(InvalidGeometryError):
        parse_template(text)


def test_load_template(tmp_path):
    path = tmp_path / "board.txt"
    path.write_text(" . \n.,.\n . \n", encoding='utf-8')

    rows = load_template(str(path))

    assert rows == [" . ", ".,.", " . "]
    assert Geometry(rows) == Geometry(PRESETS['plus'])


def test_parse_cell(english):
    assert parse_cell("D4", english) == 16
    assert parse_cell("d4", english) == 16
    assert parse_cell(" C1 ", english) == 0
    assert parse_cell("16", english) == 16


@pytest.mark.parametrize("text", ["A1", "99", "ZZ", "", "D", "4D"])
def test_parse_cell_invalid(english, text):
    """Несуществующая клетка — InvalidCellError (он же ValueError)."""
    with pytest.raises(InvalidCellError):
        parse_cell(text, english)
    with pytest.raises(ValueError):
        parse_cell(text, english)


def test_parse_pegs(english):
    assert parse_pegs("C1, D4 E1", english) == (1 << 0) | (1 << 16) | (1 << 2)
    assert parse_pegs("", english) == 0


def test_display_board():
    g = Geometry(["..,"])

    assert display_board(g, 0b011) == "   A B C\n1  ● ● ⊙"
    assert display_board(g, 0b011, hints={0}) == "   A B C\n1  ◆ ● ⊙"
    assert display_board(g, 0b011, active=0, targets={2}) == "   A B C\n1  ◉ ● ◌"
    assert display_board(g, 0b011, hints={2}, active=0) == "   A B C\n1  ◉ ● ◇"
    assert display_board(g, 0b100) == "   A B C\n1  ○ ○ ●"


def test_display_board_missing_cells():
    g = Geometry(PRESETS['plus'])
    lines = display_board(g, 0b11011).split("\n")

    assert lines[1] == "1    ●"
    assert lines[2] == "2  ● ⊙ ●"


def test_format_moves(english):
    d2 = english.cell_at(1, 3)
    d3 = english.cell_at(2, 3)

    assert format_move(english, (d2, d3, english.goal)) == "D2 → D4"
    assert format_moves(english, []) == []
