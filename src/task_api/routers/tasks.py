"""Task API router."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from ..auth import get_current_owner
from ..core.pagination import normalize_page_params
from ..db import TaskStore
from ..dependencies import get_task_store
from ..models import (
    Task,
    TaskCompletionUpdate,
    TaskCreate,
    TaskPageResponse,
    TodayCountResponse,
    TodayTasksResponse,
)
from ..services import tasks as task_service

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def reference_date(on: date | None = Query(None, alias="date")) -> date:
    """The day the today endpoints report on; defaults to the server's local date."""
    return on or date.today()


# =============================================================================
# Collection Endpoints
# =============================================================================


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(
    task_data: TaskCreate,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
):
    """Create a new task."""
    return task_service.create_task(store, owner_id, task_data)


@router.get("", response_model=TaskPageResponse)
def list_tasks(
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
):
    """Get a page of tasks, optionally filtered by a title search."""
    params = normalize_page_params(page, limit, search)
    return task_service.list_tasks(store, owner_id, params)


# =============================================================================
# Today Endpoints
# =============================================================================


@router.get("/today/count", response_model=TodayCountResponse)
def count_today_tasks(
    on: date = Depends(reference_date),
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
):
    """Count tasks scheduled for today."""
    count = task_service.count_today_tasks(store, owner_id, on)
    return TodayCountResponse(today_task_count=count)


@router.get("/today", response_model=TodayTasksResponse)
def list_today_tasks(
    on: date = Depends(reference_date),
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
):
    """Get today's one-off tasks and the recurring tasks due today."""
    tasks = task_service.list_today_tasks(store, owner_id, on)
    return TodayTasksResponse(tasks=tasks, count=len(tasks))


# =============================================================================
# Single Task Endpoints
# =============================================================================


@router.patch("/{task_id}", response_model=Task)
def update_task_completion(
    task_id: str,
    update: TaskCompletionUpdate,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
):
    """Mark a task as completed or open."""
    return task_service.set_task_completion(store, owner_id, task_id, update.is_completed)
