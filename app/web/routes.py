"""
Session-aware API routes.

Each route authenticates the caller, authorizes self-or-admin access and then
forwards the request unchanged to the backend, relaying its status and error
message. Input validation is left to the backend.
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from app.api.errors import INTERNAL_ERROR, error_response, render
from app.core.result import AppError
from app.core.security import SessionClaims, create_session_token
from app.web.backend import BackendClient, get_backend
from app.web.session import can_act_on, get_session

logger = logging.getLogger(__name__)

router = APIRouter()

UNAUTHORIZED = "Unauthorized - Please log in"


class SessionRefresh(BaseModel):
    email: str


class SessionToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


def _backend_error(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return None


def relay(response: httpx.Response, failure_message: str) -> Response:
    """
    Relay a backend response to the caller.

    Args:
        response: Backend response
        failure_message: Message used when the backend error carries none

    Returns:
        ``{"error": ...}`` with the backend status on failure, 204 for empty
        successes, otherwise the backend JSON with status 200
    """
    if not response.is_success:
        logger.error(f"Backend returned {response.status_code} for {response.request.method} "
                     f"{response.request.url.path}")
        return error_response(_backend_error(response) or failure_message, response.status_code)

    if response.status_code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return JSONResponse(status_code=status.HTTP_200_OK, content=response.json())


def _forbidden(claims: SessionClaims, action: str, message: str) -> Response:
    logger.warning(f"User {claims.id} denied: {action}")
    return render(AppError.forbidden(message))


@router.put("/users/{user_id}/profile", summary="Update a profile on behalf of the signed-in user.")
async def update_profile(user_id: str, request: Request, claims: Optional[SessionClaims] = Depends(get_session),
                         backend: BackendClient = Depends(get_backend)):
    try:
        if claims is None:
            return render(AppError.unauthorized(UNAUTHORIZED))

        if not can_act_on(claims, user_id):
            return _forbidden(claims, f"update profile {user_id}",
                              "Forbidden - You can only update your own profile")

        body = await request.body()
        response = await backend.update_profile(user_id, body)
        return relay(response, "Failed to update profile")
    except Exception:
        logger.exception("Profile update error")
        return error_response(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/users/email/{email}", summary="Get the signed-in user's profile by email.")
async def get_profile(email: str, claims: Optional[SessionClaims] = Depends(get_session),
                      backend: BackendClient = Depends(get_backend)):
    try:
        if claims is None:
            return render(AppError.unauthorized(UNAUTHORIZED))

        if not claims.is_admin and claims.email != email:
            return _forbidden(claims, f"view profile {email}", "Forbidden - You can only view your own profile")

        response = await backend.get_user_by_email(email)
        return relay(response, "Failed to load profile")
    except Exception:
        logger.exception("Profile fetch error")
        return error_response(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.delete("/users/{user_id}", summary="Delete the signed-in user's account.")
async def delete_account(user_id: str, claims: Optional[SessionClaims] = Depends(get_session),
                         backend: BackendClient = Depends(get_backend)):
    try:
        if claims is None:
            return render(AppError.unauthorized(UNAUTHORIZED))

        if not can_act_on(claims, user_id):
            return _forbidden(claims, f"delete account {user_id}",
                              "Forbidden - You can only delete your own account")

        response = await backend.delete_user(user_id)
        return relay(response, "Failed to delete account")
    except Exception:
        logger.exception("Account deletion error")
        return error_response(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/auth/session", summary="Re-issue the session token after an email change.",
             response_model=SessionToken)
async def refresh_session(data: SessionRefresh, claims: Optional[SessionClaims] = Depends(get_session),
                          backend: BackendClient = Depends(get_backend)):
    """
    Re-issue the caller's session with the account's current email and role.

    The email must resolve to the caller's own account.
    """
    try:
        if claims is None:
            return render(AppError.unauthorized(UNAUTHORIZED))

        response = await backend.get_user_by_email(data.email)
        if not response.is_success:
            return relay(response, "Failed to refresh session")

        user = response.json()
        if user.get("id") != claims.id:
            return _forbidden(claims, f"refresh session as {data.email}",
                              "Forbidden - You can only refresh your own session")

        token = create_session_token(SessionClaims(id=claims.id, email=user["email"], role=user["role"]))
        return SessionToken(access_token=token)
    except Exception:
        logger.exception("Session refresh error")
        return error_response(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)
