"""Main API router."""

from fastapi import APIRouter

from src.api.interactions import router as interactions_router
from src.api.media import router as media_router
from src.api.profiles import router as profiles_router

api_router = APIRouter()

api_router.include_router(media_router, prefix="/media", tags=["media"])
api_router.include_router(
    interactions_router, prefix="/user-media-interactions", tags=["interactions"]
)
api_router.include_router(profiles_router, prefix="/user-profiles", tags=["profiles"])
