"""
Session resolution for the web tier.

Sessions are signed tokens issued by the identity provider and sent as
``Authorization: Bearer <token>``.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import SessionClaims, decode_session_token

security = HTTPBearer(auto_error=False)


def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[SessionClaims]:
    """Current session claims, or None when the caller is not signed in."""
    if not credentials:
        return None
    return decode_session_token(credentials.credentials)


def can_act_on(claims: SessionClaims, user_id: str) -> bool:
    """A caller may act on its own account; admins may act on any account."""
    return claims.is_admin or claims.id == user_id
