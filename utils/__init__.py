"""
utils - Логирование и обработка ошибок.
"""

from .logging import SolverLogger, get_logger, setup_file_logging
from .error_handling import (
    PegSolitaireError, InvalidGeometryError, InvalidCellError, handle_errors
)

__all__ = [
    'SolverLogger', 'get_logger', 'setup_file_logging',
    'PegSolitaireError', 'InvalidGeometryError', 'InvalidCellError', 'handle_errors',
]
