"""Database layer for fitness-tracker."""

from .engine import DB_FILENAME, get_db_path, init_db
from .repositories import SessionRepository

__all__ = [
    "DB_FILENAME",
    "get_db_path",
    "init_db",
    "SessionRepository",
]
