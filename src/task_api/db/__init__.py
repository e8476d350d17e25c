"""Database package."""

from .client import Database, DuplicateKeyError
from .tasks import TaskStore
from .users import UserStore

__all__ = [
    "Database",
    "DuplicateKeyError",
    "TaskStore",
    "UserStore",
]
