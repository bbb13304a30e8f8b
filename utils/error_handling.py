"""
utils/error_handling.py

Исключения и обработка ошибок.

Фатальны только ошибки конфигурации доски. Недопустимые ходы и пустая
история отмены исключениями не являются — операции возвращают False.
"""

from typing import Callable, Any
from functools import wraps

from .logging import get_logger


class PegSolitaireError(Exception):
    """Базовое исключение."""
    pass


class InvalidGeometryError(PegSolitaireError):
    """Ошибка шаблона доски."""
    pass


class InvalidCellError(PegSolitaireError, ValueError):
    """Обозначение клетки не соответствует ни одной клетке доски."""
    pass


def handle_errors(default_return: Any = None, log_error: bool = True):
    """
    Декоратор для обработки ошибок.

    Args:
        default_return: значение по умолчанию при ошибке
        log_error: логировать ли ошибку
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except PegSolitaireError as e:
                if log_error:
                    get_logger().error(f"{func.__name__}: {e}")
                return default_return
        return wrapper
    return decorator
