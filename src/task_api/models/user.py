"""Pydantic models for user registration and login."""

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """Request model for registering a user."""

    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    """Request model for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Response model for a registered user."""

    id: str
    name: str
    email: str
    created_at: int


class UserSummary(BaseModel):
    id: str
    email: str


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    access_token: str
    token_type: str = "bearer"
    user: UserSummary
