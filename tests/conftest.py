"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. bcrypt runs at its
minimum cost so hashing does not dominate the suite.
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.config import settings
from app.core.security import SessionClaims, create_session_token, get_password_hash
from app.db.init_db import init_db
from app.main import create_app
from app.models.user import User
from app.web.backend import BackendClient
from app.web.main import create_web_app

PASSWORD = "longenough1"


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session):
    """Insert a user directly. ``password=None`` creates an OAuth account."""
    def _make_user(email: str = "a@x.com", password: str | None = PASSWORD, role: str = "user") -> User:
        user = User(email=email, password=get_password_hash(password) if password else None, role=role)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def backend_app(engine):
    return create_app(engine)


@pytest.fixture
def api_client(backend_app):
    return TestClient(backend_app)


@pytest.fixture
def web_app(backend_app):
    """Web tier forwarding to the in-process backend app."""
    backend = BackendClient(base_url="http://backend", transport=httpx.ASGITransport(app=backend_app))
    return create_web_app(backend)


@pytest.fixture
def web_client(web_app):
    return TestClient(web_app)


@pytest.fixture
def auth_headers():
    """Build an Authorization header carrying a session for the given user."""
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_session_token(SessionClaims(id=user.id, email=user.email, role=user.role))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
