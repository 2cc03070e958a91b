"""
Profile client.

Client-side counterpart of the profile page: local form validation for
immediate feedback, and the calls the page makes against the web tier.
Authoritative validation stays on the backend.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional
from urllib.parse import quote

import httpx

from app.core.config import settings
from app.core.validation import MIN_PASSWORD_LENGTH, is_strong_enough, is_valid_email

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete your account? This action cannot be undone."
SESSION_REFRESH_FAILED = "Profile updated, but your session could not be refreshed. Please sign in again."


def validate_email(email: str) -> str:
    if not email:
        return "Email is required"
    if not is_valid_email(email):
        return "Invalid email format"
    return ""


def validate_password(password: str) -> str:
    if password and not is_strong_enough(password):
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return ""


def validate_confirm_password(password: str, confirm_password: str) -> str:
    if password and not confirm_password:
        return "Please confirm your new password"
    if password and confirm_password and password != confirm_password:
        return "Passwords do not match"
    return ""


@dataclass
class ProfileForm:
    """Profile form state."""
    email: str = ""
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""

    def validate(self) -> dict[str, str]:
        """
        Field name -> error message, for fields that fail validation only.

        Checks the stripped values, the same ones ``payload()`` sends.
        """
        email = self.email.strip()
        current_password = self.current_password.strip()
        new_password = self.new_password.strip()
        confirm_password = self.confirm_password.strip()

        errors = {
            "email": validate_email(email),
            "current_password": "",
            "new_password": validate_password(new_password),
            "confirm_password": validate_confirm_password(new_password, confirm_password),
        }
        if new_password and not current_password:
            errors["current_password"] = "Current password is required to change password"
        return {name: message for name, message in errors.items() if message}

    def payload(self) -> dict[str, str]:
        """Request body: the email, plus the password pair when changing password."""
        data = {"email": self.email.strip()}
        new_password = self.new_password.strip()
        if new_password:
            data["password"] = new_password
            data["currentPassword"] = self.current_password.strip()
        return data

    def clear_passwords(self) -> None:
        self.current_password = ""
        self.new_password = ""
        self.confirm_password = ""


@dataclass
class UpdateOutcome:
    ok: bool
    message: str
    errors: dict[str, str] = field(default_factory=dict)


class ProfileClient:
    """Signed-in profile operations against the web tier."""

    def __init__(self, token: str, email: str, base_url: Optional[str] = None,
                 http_client: Optional[httpx.Client] = None):
        """
        Args:
            token: Session token
            email: Email of the signed-in account
            base_url: Web tier root URL, defaults to WEB_BASE_URL
            http_client: Preconfigured client, used instead of one built from base_url
        """
        self.token: Optional[str] = token
        self.email = email
        self.profile: Optional[dict] = None
        self._client = http_client or httpx.Client(base_url=base_url or settings.WEB_BASE_URL)

    @property
    def signed_in(self) -> bool:
        return self.token is not None

    def _headers(self) -> dict[str, str]:
        if not self.token:
            raise RuntimeError("Not signed in")
        return {"Authorization": f"Bearer {self.token}"}

    @staticmethod
    def _error(response: httpx.Response, default: str) -> str:
        try:
            return response.json().get("error") or default
        except (ValueError, AttributeError):
            return default

    def load_profile(self) -> Optional[dict]:
        """Fetch the signed-in account. Returns None (and logs) on failure."""
        try:
            response = self._client.get(f"/api/users/email/{quote(self.email, safe='')}", headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Failed to load profile data: {e}")
            return None
        if not response.is_success:
            logger.error(f"Failed to load profile data: {self._error(response, response.reason_phrase)}")
            return None
        self.profile = response.json()
        return self.profile

    def form(self) -> ProfileForm:
        return ProfileForm(email=self.profile["email"] if self.profile else self.email)

    def update_profile(self, form: ProfileForm) -> UpdateOutcome:
        """
        Validate locally, then submit the profile update.

        On success the password fields are cleared and, if the email changed,
        the session is refreshed so later authorization uses the new email.
        If that refresh fails the update has still been saved, so the client
        signs out and asks for a new sign-in.
        """
        errors = form.validate()
        if errors:
            return UpdateOutcome(ok=False, message="Please fix the highlighted fields", errors=errors)

        if not self.profile:
            return UpdateOutcome(ok=False, message="Profile not loaded")

        try:
            response = self._client.put(f"/api/users/{quote(self.profile['id'], safe='')}/profile",
                                        json=form.payload(), headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Error updating profile: {e}")
            return UpdateOutcome(ok=False, message="Failed to update profile")

        if not response.is_success:
            return UpdateOutcome(ok=False, message=self._error(response, "Failed to update profile"))

        self.profile = response.json().get("user", self.profile)
        form.clear_passwords()

        email = form.email.strip()
        if email != self.email:
            try:
                self.refresh_session(email)
            except httpx.HTTPError as e:
                logger.error(f"Error refreshing session after email change: {e}")
                self.sign_out()
                return UpdateOutcome(ok=False, message=SESSION_REFRESH_FAILED)

        return UpdateOutcome(ok=True, message="Profile updated successfully!")

    def refresh_session(self, email: str) -> None:
        """Re-issue the session for ``email``. Raises ``httpx.HTTPError`` on failure."""
        response = self._client.post("/api/auth/session", json={"email": email}, headers=self._headers())
        response.raise_for_status()
        self.token = response.json()["access_token"]
        self.email = email

    def delete_account(self, confirm: Callable[[str], bool]) -> UpdateOutcome:
        """
        Delete the account after interactive confirmation, then sign out.

        Args:
            confirm: Called with the confirmation prompt; deletion proceeds only if it returns True
        """
        if not confirm(DELETE_CONFIRMATION):
            return UpdateOutcome(ok=False, message="Account deletion cancelled")

        if not self.profile:
            return UpdateOutcome(ok=False, message="Profile not loaded")

        try:
            response = self._client.delete(f"/api/users/{quote(self.profile['id'], safe='')}",
                                           headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Error deleting account: {e}")
            return UpdateOutcome(ok=False, message="Failed to delete account")

        if not response.is_success:
            return UpdateOutcome(ok=False, message=self._error(response, "Failed to delete account"))

        self.sign_out()
        return UpdateOutcome(ok=True, message="Account deleted successfully")

    def sign_out(self) -> None:
        self.token = None
        self.profile = None

    def close(self) -> None:
        self._client.close()
