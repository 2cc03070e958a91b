"""
Backend API router.

Aggregates all backend endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import users

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
