"""
User service.

Business logic for user account management.

Every operation returns a result (``Ok`` or ``AppError``) instead of raising,
and every user it hands back has already been converted to ``UserResponse``.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.result import AppError, Ok, Result
from app.core.security import get_password_hash, verify_password
from app.core.validation import MIN_PASSWORD_LENGTH, is_strong_enough, is_valid_email
from app.db.repositories.user import UserRepository
from app.models.user import User, UserRole, utcnow
from app.schemas.user import ProfileUpdate, ProfileUpdateResponse, UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email is already in use"
USER_NOT_FOUND = "User not found"
INVALID_EMAIL = "Invalid email format"
INVALID_ROLE = "Invalid role"
WEAK_PASSWORD = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
WEAK_NEW_PASSWORD = f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"

NO_CHANGES = "No changes detected"
PROFILE_UPDATED = "Profile updated successfully"

_ROLES = {role.value for role in UserRole}


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = UserRepository(session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_users(self) -> Result[list[UserResponse]]:
        return Ok([UserResponse.from_user(user) for user in self.repository.get_all()])

    def create(self, data: UserCreate) -> Result[UserResponse]:
        """
        Create a new user.

        Args:
            data: Email, plain password and optional role

        Returns:
            Ok(created user, 201), or a validation/conflict error
        """
        if not data.email or not data.password:
            return AppError.validation("Email and password are required")

        if not is_valid_email(data.email):
            return AppError.validation(INVALID_EMAIL)

        if not is_strong_enough(data.password):
            return AppError.validation(WEAK_PASSWORD)

        role = data.role or UserRole.USER.value
        if role not in _ROLES:
            return AppError.validation(INVALID_ROLE)

        if self.repository.get_by_email(data.email):
            return AppError.conflict(EMAIL_IN_USE)

        user = User(email=data.email, password=get_password_hash(data.password), role=role)
        try:
            user = self.repository.create(user)
        except IntegrityError:
            return AppError.conflict(EMAIL_IN_USE)

        logger.info(f"Created user {user.id} with role {user.role}")
        return Ok(UserResponse.from_user(user), status_code=201)

    def get_by_id(self, user_id: Optional[str]) -> Result[UserResponse]:
        if not user_id:
            return AppError.validation("User ID is required")

        user = self.repository.get_by_id(user_id)
        if not user:
            return AppError.not_found(USER_NOT_FOUND)
        return Ok(UserResponse.from_user(user))

    def get_by_email(self, email: Optional[str]) -> Result[UserResponse]:
        if not email:
            return AppError.validation("Email is required")

        user = self.repository.get_by_email(email)
        if not user:
            return AppError.not_found(USER_NOT_FOUND)
        return Ok(UserResponse.from_user(user))

    def update(self, user_id: str, data: UserUpdate) -> Result[UserResponse]:
        """
        Admin update: overwrite any supplied field.

        Args:
            user_id: User to update
            data: Optional email, password (re-hashed) and role

        Returns:
            Ok(updated user), or a not-found/validation/conflict error
        """
        user = self.repository.get_by_id(user_id)
        if not user:
            return AppError.not_found(USER_NOT_FOUND)

        changes: dict = {}
        if data.email:
            if not is_valid_email(data.email):
                return AppError.validation(INVALID_EMAIL)
            if self.repository.get_by_email_excluding(data.email, user.id):
                return AppError.conflict(EMAIL_IN_USE)
            changes["email"] = data.email

        if data.password:
            if not is_strong_enough(data.password):
                return AppError.validation(WEAK_PASSWORD)
            changes["password"] = get_password_hash(data.password)

        if data.role:
            if data.role not in _ROLES:
                return AppError.validation(INVALID_ROLE)
            changes["role"] = data.role

        result = self._apply(user, changes)
        if isinstance(result, AppError):
            return result

        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return Ok(UserResponse.from_user(result))

    def update_profile(self, user_id: str, data: ProfileUpdate) -> Result[ProfileUpdateResponse]:
        """
        Self-service update of email and/or password.

        A new password requires proof of the current one. Accounts without a
        stored password (OAuth) cannot set one through this path.

        Args:
            user_id: User to update
            data: Optional email, new password and current password

        Returns:
            Ok({message, user}), or an error; a failed check never writes
        """
        user = self.repository.get_by_id(user_id)
        if not user:
            return AppError.not_found(USER_NOT_FOUND)

        if data.password:
            if not data.current_password:
                return AppError.validation("Current password is required to change password")

            if not user.password:
                return AppError.validation("Cannot change password for OAuth accounts")

            if not verify_password(data.current_password, user.password):
                logger.info(f"Rejected password change for user {user_id}: current password mismatch")
                return AppError.unauthorized("Current password is incorrect")

            if not is_strong_enough(data.password):
                return AppError.validation(WEAK_NEW_PASSWORD)

        email_changed = bool(data.email) and data.email != user.email
        if email_changed:
            if not is_valid_email(data.email):
                return AppError.validation(INVALID_EMAIL)
            if self.repository.get_by_email_excluding(data.email, user.id):
                return AppError.conflict(EMAIL_IN_USE)

        changes: dict = {}
        if email_changed:
            changes["email"] = data.email
        if data.password:
            changes["password"] = get_password_hash(data.password)

        if not changes:
            return Ok(ProfileUpdateResponse(message=NO_CHANGES, user=UserResponse.from_user(user)))

        result = self._apply(user, changes)
        if isinstance(result, AppError):
            return result

        logger.info(f"Profile of user {user_id} updated: {sorted(changes)}")
        return Ok(ProfileUpdateResponse(message=PROFILE_UPDATED, user=UserResponse.from_user(result)))

    def delete(self, user_id: str) -> Result[None]:
        if not self.repository.delete(user_id):
            return AppError.not_found(USER_NOT_FOUND)

        logger.info(f"Deleted user {user_id}")
        return Ok(None, status_code=204)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(self, user: User, changes: dict) -> User | AppError:
        """Write the changes in one update. A racing email change surfaces as a conflict."""
        for key, value in changes.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        try:
            return self.repository.update(user)
        except IntegrityError:
            logger.warning(f"Unique constraint violated while updating user {user.id}")
            return AppError.conflict(EMAIL_IN_USE)
