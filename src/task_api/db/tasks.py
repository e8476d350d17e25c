"""Task persistence."""

from __future__ import annotations

import json
import sqlite3
from typing import TYPE_CHECKING

from .client import Database

if TYPE_CHECKING:
    from ..core.queries import TaskQuery


def _row_to_task(row: sqlite3.Row) -> dict:
    task = dict(row)
    task["is_recurring"] = bool(task["is_recurring"])
    task["is_completed"] = bool(task["is_completed"])
    task["recurrence_days"] = json.loads(task["recurrence_days"])
    task["tags"] = json.loads(task["tags"])
    return task


class TaskStore:
    """Tasks table operations. Lookups by id are always scoped to an owner."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create_task(self, task: dict) -> dict:
        """Insert a task and return the stored record."""
        with self.db.connect() as conn:
            conn.execute(
                """
                INSERT INTO tasks (
                    id, owner_id, title, description, card_color,
                    is_recurring, recurrence_type, recurrence_days, tags,
                    is_completed, scheduled_date, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task["id"],
                    task["owner_id"],
                    task["title"],
                    task.get("description"),
                    task["card_color"],
                    int(task["is_recurring"]),
                    task.get("recurrence_type"),
                    json.dumps(task.get("recurrence_days", [])),
                    json.dumps(task.get("tags", [])),
                    int(task.get("is_completed", False)),
                    task.get("scheduled_date"),
                    task["created_at"],
                    task["updated_at"],
                ),
            )
        return self.get_task(task["owner_id"], task["id"])

    def get_task(self, owner_id: str, task_id: str) -> dict | None:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM tasks WHERE id = ? AND owner_id = ?",
                (task_id, owner_id),
            )
            row = cursor.fetchone()
            return _row_to_task(row) if row else None

    def find_task_by_title(self, owner_id: str, title: str) -> dict | None:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM tasks WHERE owner_id = ? AND title = ?",
                (owner_id, title),
            )
            row = cursor.fetchone()
            return _row_to_task(row) if row else None

    def find_tasks(self, query: TaskQuery) -> list[dict]:
        """Run a planned query and return the matching tasks in plan order."""
        sql = f"SELECT * FROM tasks WHERE {query.where} ORDER BY {query.order_by}"
        params = list(query.params)
        if query.limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([query.limit, query.offset])
        with self.db.connect() as conn:
            cursor = conn.execute(sql, params)
            return [_row_to_task(row) for row in cursor.fetchall()]

    def count_tasks(self, query: TaskQuery) -> int:
        """Count the tasks matching a plan, ignoring its order and window."""
        with self.db.connect() as conn:
            cursor = conn.execute(
                f"SELECT COUNT(*) FROM tasks WHERE {query.where}", query.params
            )
            return cursor.fetchone()[0]

    def update_task_completion(
        self, owner_id: str, task_id: str, is_completed: bool, updated_at: int
    ) -> dict | None:
        """Set a task's completion flag. Returns None if the owner has no such task."""
        with self.db.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks SET is_completed = ?, updated_at = ?
                WHERE id = ? AND owner_id = ?
                """,
                (int(is_completed), updated_at, task_id, owner_id),
            )
            if cursor.rowcount == 0:
                return None
        return self.get_task(owner_id, task_id)
