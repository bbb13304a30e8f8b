"""
game - Игровая сессия (ходы, отмена/повтор, подсказки).
"""

from .session import GameSession, initialize

__all__ = ['GameSession', 'initialize']
