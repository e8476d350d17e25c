"""Password hashing, access tokens, and the bearer-token gate for protected routes."""

import hashlib
import hmac
import logging
import secrets
import time

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .db import UserStore
from .dependencies import get_app_settings, get_user_store
from .errors import AppError, ErrorKind

logger = logging.getLogger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 120_000

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str, *, iterations: int = HASH_ITERATIONS) -> str:
    """Hash a password as ``algorithm$iterations$salt$digest``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), iterations
    )
    return f"{HASH_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), int(iterations)
    )
    return hmac.compare_digest(digest.hex(), expected)


def create_access_token(user_id: str, settings: Settings, now: int | None = None) -> str:
    """Issue a signed access token for a user."""
    issued_at = int(time.time()) if now is None else now
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + settings.access_token_expire_minutes * 60,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> str:
    """Return the user id carried by a token, or raise an unauthorized error."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise AppError(ErrorKind.UNAUTHORIZED, "Token expired")
    except jwt.InvalidTokenError:
        raise AppError(ErrorKind.UNAUTHORIZED, "Invalid token")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AppError(ErrorKind.UNAUTHORIZED, "Invalid token")
    return user_id


def get_current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    users: UserStore = Depends(get_user_store),
) -> str:
    """Resolve the bearer token to the id of an existing user."""
    if credentials is None:
        raise AppError(ErrorKind.UNAUTHORIZED, "Access token required")

    user_id = decode_access_token(credentials.credentials, settings)
    if users.get_user_by_id(user_id) is None:
        logger.warning("Token for unknown user %s rejected", user_id)
        raise AppError(ErrorKind.UNAUTHORIZED, "Invalid or expired token")
    return user_id
