"""Business logic services."""

from app.services.user_service import UserService

__all__ = [
    "UserService",
]
