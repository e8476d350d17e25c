"""Pydantic models for task API."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints

CARD_COLOR_PATTERN = r"^#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$"
DEFAULT_CARD_COLOR = "#ffffff"


class RecurrenceType(str, Enum):
    """Recurrence rule enumeration."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Weekday(str, Enum):
    """Weekday names, Sunday first."""

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


Title = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class TaskCreate(BaseModel):
    """Request model for creating a task.

    ``recurrence_type`` is kept as a plain string so that an unknown rule is
    reported as a bad request by the task service rather than a schema error.
    """

    title: Title
    description: Description | None = None
    card_color: str = Field(DEFAULT_CARD_COLOR, pattern=CARD_COLOR_PATTERN)
    is_recurring: bool = False
    recurrence_type: str | None = None
    recurrence_days: list[Weekday] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    scheduled_date: datetime | None = None


class TaskCompletionUpdate(BaseModel):
    """Request model for toggling completion; the value is checked by the service."""

    is_completed: Any = None


class Task(BaseModel):
    """A stored task record."""

    id: str
    owner_id: str
    title: str
    description: str | None = None
    card_color: str = DEFAULT_CARD_COLOR
    is_recurring: bool = False
    recurrence_type: RecurrenceType | None = None
    recurrence_days: list[Weekday] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_completed: bool = False
    scheduled_date: datetime | None = None
    created_at: int
    updated_at: int


class TaskPageResponse(BaseModel):
    """Response model for a page of tasks."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool
    tasks: list[Task]


class TodayTasksResponse(BaseModel):
    """Response model for today's tasks."""

    tasks: list[Task]
    count: int


class TodayCountResponse(BaseModel):
    """Response model for today's task count."""

    today_task_count: int
