"""
Unit tests for password hashing and the session token codec.
"""

from datetime import timedelta

from jose import jwt

from app.core.config import settings
from app.core.security import (
    SessionClaims,
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)


# ======================================================================
# Password hashing
# ======================================================================


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("longenough1")
        assert hashed != "longenough1"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        assert get_password_hash("longenough1") != get_password_hash("longenough1")

    def test_verify_matches(self):
        hashed = get_password_hash("longenough1")
        assert verify_password("longenough1", hashed)
        assert not verify_password("wrong-password", hashed)

    def test_verify_malformed_hash_is_false(self):
        assert not verify_password("longenough1", "not-a-bcrypt-hash")

    def test_long_password_hashes(self):
        password = "x" * 100
        assert verify_password(password, get_password_hash(password))


# ======================================================================
# Session tokens
# ======================================================================


class TestSessionTokens:

    def test_round_trip(self):
        claims = SessionClaims(id="u-1", email="a@x.com", role="admin")
        decoded = decode_session_token(create_session_token(claims))
        assert decoded == claims
        assert decoded.is_admin

    def test_expired_token_rejected(self):
        token = create_session_token(SessionClaims(id="u-1", email="a@x.com"), expires_delta=timedelta(seconds=-1))
        assert decode_session_token(token) is None

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "u-1", "email": "a@x.com"}, "other-secret", algorithm=settings.ALGORITHM)
        assert decode_session_token(token) is None

    def test_missing_email_rejected(self):
        token = jwt.encode({"sub": "u-1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        assert decode_session_token(token) is None

    def test_missing_role_defaults_to_user(self):
        token = jwt.encode({"sub": "u-1", "email": "a@x.com"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        claims = decode_session_token(token)
        assert claims.role == "user"
        assert not claims.is_admin

    def test_garbage_rejected(self):
        assert decode_session_token("not.a.token") is None
