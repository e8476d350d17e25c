"""Registration and login router."""

from fastapi import APIRouter, Depends, status

from ..config import Settings
from ..db import UserStore
from ..dependencies import get_app_settings, get_user_store
from ..models import LoginRequest, LoginResponse, UserCreate, UserResponse
from ..services import users as user_service

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, store: UserStore = Depends(get_user_store)):
    """Register a new user."""
    return user_service.register_user(store, user_data)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
):
    """Exchange email and password for an access token."""
    return user_service.login(store, settings, credentials.email, credentials.password)
