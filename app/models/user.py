"""
User database model.

Defines the User table for account management.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """
    User account.

    ``password`` holds a bcrypt hash and is empty for accounts provisioned
    by an external identity provider (OAuth).
    """
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, max_length=36)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    password: Optional[str] = Field(default=None, nullable=True)
    role: str = Field(default=UserRole.USER.value, max_length=16, nullable=False)

    # Timestamps (UTC, timezone-aware)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
