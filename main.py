#!/usr/bin/env python3
"""
main.py

Точка входа для Peg Solitaire.

Использование:
    python main.py                         # показать доску по умолчанию
    python main.py --preset english        # выбор доски
    python main.py --template board.txt    # своя доска из файла
    python main.py --check "A3 C1 D4"      # решаема ли позиция
    python main.py --starts                # из каких стартовых позиций есть решение
    python main.py --count                 # полный перебор состояний (маленькие доски)
    python main.py --play --hints          # игра в терминале с подсказками
"""

import sys
import argparse
import logging
from typing import Callable, Iterable, Optional

from core.bitboard import to_string, popcount
from core.geometry import Geometry, PRESETS, DEFAULT_PRESET
from game.session import GameSession
from peg_io import load_template, parse_cell, parse_pegs, display_board, format_move, LEGEND
from solvers.solvability import get_engine
from utils.error_handling import PegSolitaireError, handle_errors
from utils.logging import get_logger, setup_file_logging

PLAY_HELP = (
    "Команды: <клетка> (D4 или индекс) — клик, u — отмена, r — повтор, "
    "reset — сначала, h — подсказки вкл/выкл, q — выход"
)


def load_geometry(args: argparse.Namespace) -> Geometry:
    if args.template:
        return Geometry(load_template(args.template))
    return Geometry.from_preset(args.preset)


def show_board(session: GameSession, show_hints: bool) -> str:
    hints = session.hints(show_hints)
    return display_board(session.geometry, session.state, hints,
                         session.active_cell, session.targets())


def check_position(geometry: Geometry, pegs: str) -> bool:
    """Печатает позицию и её решаемость."""
    engine = get_engine(geometry)
    state = parse_pegs(pegs, geometry)
    print(to_string(geometry, state))
    solvable = engine.is_solvable(state)
    print(f"\nКолышков: {popcount(state)}")
    if solvable:
        move = engine.witness(state)
        suffix = f", например {format_move(geometry, move)}" if move else ""
        print(f"✅ Решаемо{suffix}")
    else:
        print("❌ Нерешаемо")
    print(f"📊 {engine.stats}")
    return solvable


def show_starts(geometry: Geometry) -> int:
    """Печатает клетки, с удаления колышка в которых партия решаема."""
    engine = get_engine(geometry)
    starts = engine.solvable_starts()
    good = [geometry.label(cell) for cell, ok in starts.items() if ok]
    print(f"Решаемые стартовые клетки ({len(good)} из {geometry.size}):")
    print("  " + (", ".join(good) if good else "нет"))
    print(f"📊 {engine.stats}")
    return len(good)


def count_states(geometry: Geometry) -> bool:
    try:
        solvable, unsolvable = get_engine(geometry).count_solvable()
    except ValueError as e:
        print(f"❌ {e}")
        return False
    print(f"Решаемых состояний: {solvable}")
    print(f"Нерешаемых состояний: {unsolvable}")
    return True


def play(session: GameSession, commands: Iterable[str], show_hints: bool = False,
         output: Callable[[str], None] = print) -> GameSession:
    """
    Текстовая игра: каждая команда — клик по клетке или управление историей.

    Args:
        session: игровая сессия
        commands: поток команд (например, строки stdin)
        show_hints: показывать подсказки
        output: функция вывода
    """
    geometry = session.geometry
    output(PLAY_HELP)
    output(LEGEND)
    output(show_board(session, show_hints))

    for line in commands:
        command = line.strip().lower()
        if not command:
            continue
        if command in ('q', 'quit', 'exit'):
            break
        if command == 'u':
            changed = session.undo()
        elif command == 'r':
            changed = session.redo()
        elif command == 'reset':
            session.reset()
            changed = True
        elif command == 'h':
            show_hints = not show_hints
            changed = True
        else:
            try:
                changed = session.click(parse_cell(command, geometry))
            except PegSolitaireError as e:
                output(f"⚠️ {e}")
                continue

        if not changed:
            output("Ход невозможен")
        output(show_board(session, show_hints))

        if session.is_won():
            output("🎉 Победа! Остался один колышек в цели.")
        elif session.is_stuck():
            output(f"Ходов нет, осталось {session.peg_count()} колышков. u — отмена, reset — сначала")

    return session


@handle_errors(default_return=1)
def run(args: argparse.Namespace) -> int:
    geometry = load_geometry(args)

    if args.check:
        return 0 if check_position(geometry, args.check) else 2
    if args.starts:
        return 0 if show_starts(geometry) else 2
    if args.count:
        return 0 if count_states(geometry) else 2
    if args.play:
        play(GameSession(geometry), sys.stdin, show_hints=args.hints)
        return 0

    print(to_string(geometry, geometry.full_mask))
    print(f"\nКлеток: {geometry.size}, цель: {geometry.label(geometry.goal)}")
    return 0


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Peg Solitaire: оракул решаемости и игра с подсказками',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  python main.py --preset english --starts
  python main.py --check "C1 C2 D3"
  python main.py --play --hints
        """
    )
    parser.add_argument(
        '--preset', '-p', choices=sorted(PRESETS), default=DEFAULT_PRESET,
        help=f'Встроенная доска (default: {DEFAULT_PRESET})'
    )
    parser.add_argument(
        '--template', '-t',
        help='Файл с шаблоном доски: " " — нет клетки, "." — клетка, "," — цель'
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--check', metavar='PEGS', help='Проверить позицию: список клеток с колышками')
    mode.add_argument('--starts', action='store_true', help='Найти решаемые стартовые клетки')
    mode.add_argument('--count', action='store_true', help='Полный перебор состояний')
    mode.add_argument('--play', action='store_true', help='Игра в терминале')
    parser.add_argument('--hints', action='store_true', help='Показывать подсказки в игре')
    parser.add_argument('--verbose', '-v', action='store_true', help='Отладочный вывод')
    parser.add_argument('--log-file', help='Дублировать лог в файл')

    args = parser.parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    get_logger().set_level(level)
    if args.log_file:
        setup_file_logging(args.log_file, level)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
