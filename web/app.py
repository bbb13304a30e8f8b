"""
web/app.py

Flask JSON API для интерактивной игры.

Сессия игрока хранится в cookie-сессии Flask (snapshot GameSession),
таблица мемоизации общая для всех игроков одной доски.
"""

import os
import sys
import secrets
from typing import Optional

from flask import Flask, jsonify, request, session

# Добавляем корень проекта в path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.geometry import Geometry, DEFAULT_PRESET
from game.session import GameSession
from peg_io.parser import parse_cell
from solvers.worker import SolverWorker
from utils.error_handling import PegSolitaireError
from utils.logging import get_logger

SESSION_KEY = 'game'


def create_app(preset: str = DEFAULT_PRESET, secret_key: Optional[str] = None,
               background: bool = False) -> Flask:
    """
    Создаёт Flask приложение.

    Args:
        preset: имя встроенной доски
        secret_key: ключ подписи cookie-сессии (по умолчанию случайный)
        background: считать решаемость в фоновом потоке
    """
    app = Flask(__name__)
    app.secret_key = secret_key or secrets.token_hex(16)
    app.config['PEG_PRESET'] = preset
    app.config['PEG_BACKGROUND'] = background

    geometry = Geometry.from_preset(preset)
    worker = SolverWorker(geometry) if background else None
    logger = get_logger()

    def load_game() -> GameSession:
        solvable = worker.lookup if worker is not None else None
        data = session.get(SESSION_KEY)
        if data is None:
            return GameSession(geometry, solvable=solvable)
        return GameSession.from_snapshot(geometry, data, solvable=solvable)

    def save_game(game: GameSession) -> None:
        session[SESSION_KEY] = game.snapshot()

    def game_state(game: GameSession, success: bool = True):
        show = request.args.get('show', '0') in ('1', 'true', 'yes')
        return jsonify({
            'success': success,
            'pegs': [i for i in range(geometry.size) if game.peg_at(i)],
            'active': game.active_cell,
            'in_setup': game.is_in_setup(),
            'can_undo': game.can_undo(),
            'can_redo': game.can_redo(),
            'can_reset': game.can_reset(),
            'won': game.is_won(),
            'stuck': game.is_stuck(),
            'hints': sorted(game.hints(show)),
            'targets': sorted(game.targets()),
        })

    def cell_arg(data: dict, key: str) -> int:
        value = data.get(key)
        if value is None:
            raise PegSolitaireError(f"Не указан параметр {key!r}")
        return parse_cell(str(value), geometry)

    @app.errorhandler(PegSolitaireError)
    def handle_error(e):
        logger.warning(f"API: {e}")
        return jsonify({'success': False, 'error': str(e)}), 400

    @app.route('/api/geometry', methods=['GET'])
    def get_geometry():
        """Шаблон, координаты клеток и целевая клетка."""
        return jsonify({
            'preset': preset,
            'template': list(geometry.template),
            'cells': [list(rc) for rc in geometry.cells],
            'labels': [geometry.label(i) for i in range(geometry.size)],
            'goal': geometry.goal,
        })

    @app.route('/api/state', methods=['GET'])
    def get_state():
        """Текущее состояние. ?show=1 включает подсказки."""
        return game_state(load_game())

    @app.route('/api/click', methods=['POST'])
    def click():
        data = request.get_json(silent=True) or {}
        game = load_game()
        changed = game.click(cell_arg(data, 'cell'))
        save_game(game)
        return game_state(game, changed)

    @app.route('/api/remove', methods=['POST'])
    def remove():
        data = request.get_json(silent=True) or {}
        game = load_game()
        changed = game.remove_peg(cell_arg(data, 'cell'))
        save_game(game)
        return game_state(game, changed)

    @app.route('/api/move', methods=['POST'])
    def move():
        """
        Ход.

        Входные данные:
        {
            "source": "D2",   // клетка с колышком (обозначение или индекс)
            "dest": "D4"      // пустая клетка
        }
        """
        data = request.get_json(silent=True) or {}
        game = load_game()
        changed = game.move(cell_arg(data, 'source'), cell_arg(data, 'dest'))
        save_game(game)
        return game_state(game, changed)

    @app.route('/api/select', methods=['POST'])
    def select():
        """Выбор колышка; {"cell": null} снимает выбор."""
        data = request.get_json(silent=True) or {}
        game = load_game()
        if data.get('cell') is None:
            game.clear_active_cell()
            changed = True
        else:
            changed = game.set_active_cell(cell_arg(data, 'cell'))
        save_game(game)
        return game_state(game, changed)

    @app.route('/api/undo', methods=['POST'])
    def undo():
        game = load_game()
        changed = game.undo()
        save_game(game)
        return game_state(game, changed)

    @app.route('/api/redo', methods=['POST'])
    def redo():
        game = load_game()
        changed = game.redo()
        save_game(game)
        return game_state(game, changed)

    @app.route('/api/reset', methods=['POST'])
    def reset():
        game = load_game()
        game.reset()
        save_game(game)
        return game_state(game)

    app.extensions['peg_worker'] = worker
    return app


if __name__ == '__main__':
    create_app(os.environ.get('PEG_PRESET', DEFAULT_PRESET)).run(debug=True)
