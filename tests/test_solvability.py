"""
tests/test_solvability.py

Тесты оракула решаемости (DFS с мемоизацией).
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from core.bitboard import popcount, start_state
from core.geometry import Geometry, PRESETS
from core.moves import get_moves, apply_move
from solvers.solvability import SolvabilityEngine, get_engine

SQUARE = ["...", ".,.", "..."]


def naive_solvable(geometry: Geometry, state: int) -> bool:
    """Эталон: полный перебор без мемоизации."""
    if state == geometry.goal_mask:
        return True
    return any(
        naive_solvable(geometry, apply_move(state, move))
        for move in get_moves(geometry, state)
    )


def test_line_board():
    """Линия A1 B1 C1(цель): решаемо только A1+B1 и сама цель."""
    engine = SolvabilityEngine(Geometry(["..,"]))

    assert engine.is_solvable(0b011) is True
    assert engine.is_solvable(0b100) is True
    assert engine.is_solvable(0b110) is False   # последний колышек окажется в A1
    assert engine.is_solvable(0b101) is False   # ходов нет
    assert engine.is_solvable(0b111) is False   # ходов нет
    assert engine.is_solvable(0b001) is False


def test_single_peg_states():
    """Один колышек решаем тогда и только тогда, когда он в цели."""
    g = Geometry(PRESETS['english'])
    engine = SolvabilityEngine(g)

    for cell in range(g.size):
        assert engine.is_solvable(1 << cell) == (cell == g.goal)


def test_memo_is_seeded_with_goal():
    g = Geometry(PRESETS['arrow'])
    engine = SolvabilityEngine(g)

    assert engine.memo == {g.goal_mask: True}


@pytest.mark.parametrize("state", [0, -1, -5])
def test_out_of_range_states(state):
    """Пустое или некорректное состояние — False без исключения."""
    engine = SolvabilityEngine(Geometry(["..,"]))

    assert engine.is_solvable(state) is False


def test_too_many_pegs():
    g = Geometry(["..,"])
    engine = SolvabilityEngine(g)

    assert engine.is_solvable(g.full_mask + 1) is False
    assert engine.is_solvable(1 << 40) is False


def test_matches_naive_search():
    """DFS с мемоизацией совпадает с полным перебором на всех состояниях 3x3."""
    g = Geometry(SQUARE)
    engine = SolvabilityEngine(g)

    for state in range(1, g.full_mask + 1):
        assert engine.is_solvable(state) == naive_solvable(g, state), f"state={state:#x}"


def test_memoization_is_transparent():
    """Результат не зависит от порядка и истории запросов."""
    g = Geometry(SQUARE)
    forward = SolvabilityEngine(g)
    backward = SolvabilityEngine(g)

    results = {s: forward.is_solvable(s) for s in range(1, g.full_mask + 1)}
    for state in reversed(range(1, g.full_mask + 1)):
        assert backward.is_solvable(state) == results[state]

    # Повторные запросы берутся из memo
    hits = forward.stats.memo_hits
    for state, expected in results.items():
        assert forward.is_solvable(state) == expected
    assert forward.stats.memo_hits == hits + len(results)


def test_stats():
    engine = SolvabilityEngine(Geometry(SQUARE))
    engine.is_solvable(start_state(engine.geometry, 0))

    assert engine.stats.queries == 1
    assert engine.stats.states_evaluated > 0
    assert len(engine.memo) >= engine.stats.states_evaluated
    assert "Queries: 1" in str(engine.stats)


def test_plus_board_is_never_solvable():
    """Крест из 5 клеток нерешаем ни из какой стартовой позиции."""
    engine = SolvabilityEngine(Geometry(PRESETS['plus']))

    assert engine.solvable_starts() == {i: False for i in range(5)}


def test_witness():
    engine = SolvabilityEngine(Geometry(["..,"]))

    assert engine.witness(0b011) == (0, 1, 2)
    assert engine.witness(0b110) is None
    assert engine.witness(0b100) is None
    assert engine.witness(0) is None


def test_witness_leads_to_solvable_state():
    g = Geometry(SQUARE)
    engine = SolvabilityEngine(g)

    for state in range(1, g.full_mask + 1):
        move = engine.witness(state)
        if state != g.goal_mask:
            assert (move is not None) == engine.is_solvable(state)
        if move is not None:
            assert engine.is_solvable(apply_move(state, move))


def test_solvable_moves():
    g = Geometry(SQUARE)
    engine = SolvabilityEngine(g)
    state = start_state(g, g.goal)

    moves = engine.solvable_moves(state)
    assert set(moves) <= set(get_moves(g, state))
    assert bool(moves) == engine.is_solvable(state)
    assert SolvabilityEngine(Geometry(["..,"])).solvable_moves(0b011) == [(0, 1, 2)]


def test_count_solvable_line():
    solvable, unsolvable = SolvabilityEngine(Geometry(["..,"])).count_solvable()

    assert (solvable, unsolvable) == (2, 5)


def test_count_solvable_plus():
    """В кресте решаемо только целевое состояние."""
    assert SolvabilityEngine(Geometry(PRESETS['plus'])).count_solvable() == (1, 30)


def test_count_solvable_matches_recursive():
    """Перебор снизу вверх совпадает с рекурсивным оракулом."""
    g = Geometry(SQUARE)
    engine = SolvabilityEngine(g)
    solvable, unsolvable = engine.count_solvable()

    expected = sum(engine.is_solvable(s) for s in range(1, g.full_mask + 1))
    assert solvable == expected
    assert solvable + unsolvable == g.full_mask


def test_count_solvable_rejects_large_boards():
    with pytest.raises(ValueError):
        SolvabilityEngine(Geometry(PRESETS['english'])).count_solvable()


def test_get_engine_is_shared():
    """Один решатель на геометрию."""
    a = get_engine(Geometry(SQUARE))
    b = get_engine(Geometry(list(SQUARE)))

    assert a is b
    assert get_engine(Geometry(["..,"])) is not a


def test_successor_has_one_peg_less():
    g = Geometry(SQUARE)
    state = start_state(g, 0)
    for move in get_moves(g, state):
        assert popcount(apply_move(state, move)) == popcount(state) - 1
