"""SQLite database client."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at INTEGER NOT NULL,
        updated_at INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        owner_id TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        card_color TEXT NOT NULL DEFAULT '#ffffff',
        is_recurring INTEGER NOT NULL DEFAULT 0,
        recurrence_type TEXT,
        recurrence_days TEXT NOT NULL DEFAULT '[]',
        tags TEXT NOT NULL DEFAULT '[]',
        is_completed INTEGER NOT NULL DEFAULT 0,
        scheduled_date TEXT,
        created_at INTEGER NOT NULL,
        updated_at INTEGER NOT NULL,
        UNIQUE (owner_id, title)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_tasks_owner_scheduled
    ON tasks(owner_id, scheduled_date)
    """,
)


UNIQUE_ERROR_NAMES = {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}


def _casefold(value: str | None) -> str | None:
    """Unicode-aware case folding; SQLite's lower() only folds ASCII."""
    return value.casefold() if value is not None else None


class DuplicateKeyError(Exception):
    """A write violated a uniqueness constraint."""


class Database:
    """SQLite database with an explicit open/close lifecycle.

    Every unit of work gets its own connection, so one instance can be shared
    by the threads serving requests.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        """Create the schema and accept work."""
        if self._open:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._open = True
        with self.connect() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            for statement in SCHEMA:
                conn.execute(statement)
        logger.info("Database opened at %s", self.path)

    def close(self) -> None:
        if self._open:
            self._open = False
            logger.info("Database at %s closed", self.path)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection, committing on success and rolling back on error."""
        if not self._open:
            raise RuntimeError("Database is not open")
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if exc.sqlite_errorname in UNIQUE_ERROR_NAMES:
                raise DuplicateKeyError(str(exc)) from exc
            raise
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
