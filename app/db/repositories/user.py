"""
User repository.

Handles database operations for User model.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, user: User) -> User:
        """
        Create a new user in the database.

        Args:
            user: User instance to create

        Returns:
            Created user with generated id

        Raises:
            IntegrityError: If the email is already taken (session is rolled back)
        """
        return self._save(user)

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User instance if found, None otherwise
        """
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: User email

        Returns:
            User instance if found, None otherwise
        """
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def get_by_email_excluding(self, email: str, user_id: str) -> Optional[User]:
        """
        Get a user holding the given email other than ``user_id``.

        Args:
            email: Email to look up
            user_id: User to ignore

        Returns:
            The other user if one exists, None otherwise
        """
        statement = select(User).where(User.email == email, User.id != user_id)
        return self.session.exec(statement).first()

    def get_all(self) -> list[User]:
        """
        Get all users.

        Returns:
            List of users ordered by creation time
        """
        statement = select(User).order_by(User.created_at)
        return list(self.session.exec(statement).all())

    def update(self, user: User) -> User:
        """
        Update an existing user.

        Args:
            user: User instance with updated data

        Returns:
            Updated user

        Raises:
            IntegrityError: If the new email is already taken (session is rolled back)
        """
        return self._save(user)

    def delete(self, user_id: str) -> bool:
        """
        Delete a user by ID.

        Args:
            user_id: User ID to delete

        Returns:
            True if deleted, False if not found
        """
        user = self.get_by_id(user_id)
        if user:
            self.session.delete(user)
            self.session.commit()
            return True
        return False

    def _save(self, user: User) -> User:
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user
