"""User registration and login."""

import logging
import time

from ulid import ULID

from ..auth import create_access_token, hash_password, verify_password
from ..config import Settings
from ..db import UserStore
from ..errors import AppError, ErrorKind
from ..models import LoginResponse, UserCreate, UserResponse, UserSummary

logger = logging.getLogger(__name__)


def register_user(store: UserStore, payload: UserCreate) -> UserResponse:
    email = payload.email.lower()
    if store.get_user_by_email(email):
        raise AppError(ErrorKind.CONFLICT, "User already exists")

    now = int(time.time())
    user = store.create_user(
        {
            "id": str(ULID()),
            "name": payload.name.strip(),
            "email": email,
            "password_hash": hash_password(payload.password),
            "created_at": now,
            "updated_at": now,
        }
    )
    logger.info("Registered user %s", user["id"])
    return UserResponse(
        id=user["id"], name=user["name"], email=user["email"], created_at=user["created_at"]
    )


def login(store: UserStore, settings: Settings, email: str, password: str) -> LoginResponse:
    """Check credentials and issue an access token."""
    user = store.get_user_by_email(email.lower())
    if user is None or not verify_password(password, user["password_hash"]):
        logger.info("Failed login attempt")
        raise AppError(ErrorKind.UNAUTHORIZED, "Invalid email or password")

    return LoginResponse(
        access_token=create_access_token(user["id"], settings),
        user=UserSummary(id=user["id"], email=user["email"]),
    )
