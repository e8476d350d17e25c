"""Models package."""

from .task import (
    RecurrenceType,
    Task,
    TaskCompletionUpdate,
    TaskCreate,
    TaskPageResponse,
    TodayCountResponse,
    TodayTasksResponse,
    Weekday,
)
from .user import LoginRequest, LoginResponse, UserCreate, UserResponse, UserSummary

__all__ = [
    "RecurrenceType",
    "Weekday",
    "Task",
    "TaskCreate",
    "TaskCompletionUpdate",
    "TaskPageResponse",
    "TodayTasksResponse",
    "TodayCountResponse",
    "UserCreate",
    "LoginRequest",
    "UserResponse",
    "UserSummary",
    "LoginResponse",
]
