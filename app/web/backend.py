"""
Backend API client.

Thin async wrapper over the backend user endpoints. One instance lives on
``app.state.backend`` for the lifetime of the web application.
"""

from typing import Optional
from urllib.parse import quote

import httpx
from fastapi import Request

from app.core.config import settings

JSON_HEADERS = {"Content-Type": "application/json"}


def _segment(value: str) -> str:
    return quote(value, safe="")


class BackendClient:
    """HTTP client for the backend user API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            base_url: Backend root URL, defaults to API_BASE_URL
            timeout: Request timeout in seconds, defaults to BACKEND_TIMEOUT_SECONDS
            transport: Custom transport (tests mount the backend app here)
        """
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.BACKEND_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def update_profile(self, user_id: str, body: bytes) -> httpx.Response:
        """Forward a raw JSON body to ``PUT /users/{id}/profile``."""
        return await self._client.put(f"/users/{_segment(user_id)}/profile", content=body, headers=JSON_HEADERS)

    async def get_user_by_email(self, email: str) -> httpx.Response:
        return await self._client.get(f"/users/email/{_segment(email)}")

    async def delete_user(self, user_id: str) -> httpx.Response:
        return await self._client.delete(f"/users/{_segment(user_id)}")

    async def aclose(self) -> None:
        await self._client.aclose()


def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend
