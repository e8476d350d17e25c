"""FastAPI dependencies giving handlers access to application state."""

from fastapi import Request

from .config import Settings
from .db import Database, TaskStore, UserStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_task_store(request: Request) -> TaskStore:
    return TaskStore(get_database(request))


def get_user_store(request: Request) -> UserStore:
    return UserStore(get_database(request))
