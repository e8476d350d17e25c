"""Task operations. Every operation is scoped to a single owner."""

import logging
import time
from datetime import date
from typing import Any

from ulid import ULID

from ..core.pagination import PageParams, paginate
from ..core.queries import (
    plan_list,
    plan_today_count,
    plan_today_list,
    to_storage_datetime,
)
from ..core.recurrence import is_due
from ..core.validation import clean_tags, validate_recurrence
from ..db import TaskStore
from ..errors import AppError, ErrorKind
from ..models import Task, TaskCreate, TaskPageResponse

logger = logging.getLogger(__name__)


def create_task(store: TaskStore, owner_id: str, payload: TaskCreate) -> Task:
    """Create a task for an owner.

    Raises a conflict if the owner already has a task with this title and a
    bad request if the recurrence rule is unusable.
    """
    if store.find_task_by_title(owner_id, payload.title):
        raise AppError(ErrorKind.CONFLICT, "A task with this title already exists")

    errors = validate_recurrence(payload)
    if errors:
        raise AppError(ErrorKind.BAD_REQUEST, errors[0].message, errors)

    now = int(time.time())
    recurring = payload.is_recurring
    task = store.create_task(
        {
            "id": str(ULID()),
            "owner_id": owner_id,
            "title": payload.title,
            "description": payload.description,
            "card_color": payload.card_color,
            "is_recurring": recurring,
            "recurrence_type": payload.recurrence_type if recurring else None,
            "recurrence_days": (
                [day.value for day in payload.recurrence_days] if recurring else []
            ),
            "tags": clean_tags(payload.tags),
            "is_completed": False,
            "scheduled_date": (
                to_storage_datetime(payload.scheduled_date)
                if payload.scheduled_date
                else None
            ),
            "created_at": now,
            "updated_at": now,
        }
    )
    logger.info("Created task %s for owner %s", task["id"], owner_id)
    return Task(**task)


def list_tasks(store: TaskStore, owner_id: str, params: PageParams) -> TaskPageResponse:
    """Return one page of the owner's tasks, newest scheduled first."""
    query = plan_list(owner_id, params.page, params.limit, params.search)
    page = paginate(params.page, params.limit, store.count_tasks(query))
    # Pages past the end are empty; the offset may not even fit in SQLite.
    tasks = store.find_tasks(query) if page.skip < page.total_items else []
    return TaskPageResponse(
        current_page=page.current_page,
        total_pages=page.total_pages,
        total_items=page.total_items,
        items_per_page=page.items_per_page,
        has_next_page=page.has_next_page,
        has_previous_page=page.has_previous_page,
        tasks=[Task(**task) for task in tasks],
    )


def count_today_tasks(store: TaskStore, owner_id: str, reference_date: date) -> int:
    """Count the owner's tasks scheduled on the reference date.

    Unlike list_today_tasks, recurring rules are not expanded here.
    """
    return store.count_tasks(plan_today_count(owner_id, reference_date))


def list_today_tasks(store: TaskStore, owner_id: str, reference_date: date) -> list[Task]:
    """Return the owner's one-off tasks for the date plus recurring tasks due on it."""
    tasks = [Task(**task) for task in store.find_tasks(plan_today_list(owner_id, reference_date))]
    return [task for task in tasks if not task.is_recurring or is_due(task, reference_date)]


def set_task_completion(
    store: TaskStore, owner_id: str, task_id: str, is_completed: Any
) -> Task:
    """Set a task's completion flag.

    Concurrent updates on the same task resolve as last write wins.
    """
    if not isinstance(is_completed, bool):
        raise AppError(ErrorKind.BAD_REQUEST, "`is_completed` must be a boolean")

    task = store.update_task_completion(owner_id, task_id, is_completed, int(time.time()))
    if task is None:
        raise AppError(ErrorKind.NOT_FOUND, "Task not found")

    logger.info("Task %s marked %s", task_id, "completed" if is_completed else "open")
    return Task(**task)
