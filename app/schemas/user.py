"""
User API schemas.

Pydantic models for user-related request/response validation.

Request bodies are deliberately loose (every field optional) so that the
service can report missing or malformed fields with its own messages.
Every outbound user payload goes through ``UserResponse.from_user``, which
has no password field.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import User


# Request schemas
class UserCreate(BaseModel):
    """Schema for account creation."""
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UserUpdate(BaseModel):
    """Schema for the admin update path. Any supplied field is overwritten."""
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Schema for the self-service profile update path."""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    password: Optional[str] = Field(None, description="New password (min 8 characters)")
    current_password: Optional[str] = Field(None, alias="currentPassword")


# Response schemas
class UserResponse(BaseModel):
    """Schema for user data in API responses (no sensitive data)."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)


class ProfileUpdateResponse(BaseModel):
    """Schema for the profile update result."""
    message: str
    user: UserResponse


class ErrorResponse(BaseModel):
    error: str
