"""
User endpoints.

CRUD over user accounts plus the self-service profile update.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.errors import render
from app.db.session import get_db
from app.schemas.user import (
    ErrorResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter(responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})


@router.get("", summary="List all users.", response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return render(UserService(db).list_users())


@router.post("", summary="Create a user.", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Create a new user.

    Args:
        user_data: email, password and optional role (defaults to "user")
        db: Database session

    Returns:
        Created user data (without password)
    """
    return render(UserService(db).create(user_data))


@router.get("/email/{email}", summary="Get a user by email.", response_model=UserResponse)
def get_user_by_email(email: str, db: Session = Depends(get_db)):
    return render(UserService(db).get_by_email(email))


@router.get("/{user_id}", summary="Get a user by id.", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return render(UserService(db).get_by_id(user_id))


@router.put("/{user_id}", summary="Update any field of a user.", response_model=UserResponse)
def update_user(user_id: str, user_data: Optional[UserUpdate] = None, db: Session = Depends(get_db)):
    return render(UserService(db).update(user_id, user_data or UserUpdate()))


@router.put("/{user_id}/profile", summary="Update own email and/or password.",
            response_model=ProfileUpdateResponse,
            responses={401: {"model": ErrorResponse}})
def update_user_profile(user_id: str, profile_data: Optional[ProfileUpdate] = None, db: Session = Depends(get_db)):
    """
    Self-service profile update.

    Changing the password requires ``currentPassword``. Returns
    ``{message, user}``; message is "No changes detected" when nothing changed,
    including when no body is sent.
    """
    return render(UserService(db).update_profile(user_id, profile_data or ProfileUpdate()))


@router.delete("/{user_id}", summary="Delete a user.", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    return render(UserService(db).delete(user_id))
