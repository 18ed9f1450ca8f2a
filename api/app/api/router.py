"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import health, media, users

api_router = APIRouter()
api_router.include_router(health.router, tags=["internal"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
