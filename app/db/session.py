"""
Database session management.

Provides SQLModel engine and session creation. The engine is created by the
application factory and kept on ``app.state``; endpoints receive a session
through the ``get_db`` dependency.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from app.core.config import settings


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Create the database engine.

    Args:
        database_url: SQLAlchemy URL, defaults to the configured database

    Returns:
        SQLAlchemy engine
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        return create_engine(url, echo=settings.DEBUG, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        echo=settings.DEBUG,  # Log SQL queries in debug mode
        pool_pre_ping=True,   # Verify connections before using
        pool_size=5,          # Connection pool size
        max_overflow=10       # Max connections beyond pool_size
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session bound to the application's engine

    Example:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.exec(select(Item)).all()
    """
    with Session(request.app.state.engine) as session:
        yield session
