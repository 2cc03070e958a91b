"""Pydantic schemas for request/response validation."""

from app.schemas.user import (
    ErrorResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "ProfileUpdate",
    "ProfileUpdateResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
