"""User profile endpoints: preferences and account deletion."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path
from supabase import AsyncClient

from src.db import get_admin_db, get_db
from src.db.crud import (
    add_favorite_genre,
    add_streaming_platform,
    delete_user_account,
    get_all_users,
    get_favorite_genres,
    get_user_profile_or_raise,
    get_user_streaming_platforms,
    remove_favorite_genre,
    remove_streaming_platform,
)
from src.models.schemas import (
    AccountDeletionResult,
    FavoriteGenres,
    FavoriteGenreUpdate,
    MediaType,
    StreamingPlatformUpdate,
    UserProfile,
    UserSummary,
)

router = APIRouter()
logger = logging.getLogger(__name__)

Db = Annotated[AsyncClient, Depends(get_db)]
AdminDb = Annotated[AsyncClient, Depends(get_admin_db)]


@router.get("", response_model=list[UserSummary])
async def list_users(db: Db) -> list[UserSummary]:
    """Regular user accounts, newest first."""
    return await get_all_users(db)


@router.get("/{user_id}", response_model=UserProfile)
async def get_profile(user_id: UUID, db: Db) -> UserProfile:
    return await get_user_profile_or_raise(db, str(user_id))


@router.delete("/{user_id}", response_model=AccountDeletionResult)
async def delete_account(user_id: UUID, db: Db, admin_db: AdminDb) -> AccountDeletionResult:
    """Anonymize the profile and remove the auth account.

    Always answers 200; failures are reported in ``error``.
    """
    result = await delete_user_account(db, admin_db, str(user_id))
    if not result.success:
        logger.warning(f"Account deletion for {user_id} failed: {result.error}")
    return result


@router.get("/{user_id}/favorite-genres", response_model=FavoriteGenres)
async def list_favorite_genres(user_id: UUID, db: Db) -> FavoriteGenres:
    return await get_favorite_genres(db, str(user_id))


@router.post("/{user_id}/favorite-genres", response_model=FavoriteGenres)
async def add_favorite_genre_endpoint(
    user_id: UUID,
    data: FavoriteGenreUpdate,
    db: Db,
) -> FavoriteGenres:
    return await add_favorite_genre(db, str(user_id), data.genre_id, data.media_type)


@router.delete("/{user_id}/favorite-genres/{media_type}/{genre_id}", response_model=FavoriteGenres)
async def remove_favorite_genre_endpoint(
    user_id: UUID,
    media_type: MediaType,
    genre_id: Annotated[int, Path(ge=1)],
    db: Db,
) -> FavoriteGenres:
    return await remove_favorite_genre(db, str(user_id), genre_id, media_type)


@router.get("/{user_id}/streaming-platforms", response_model=list[str])
async def list_streaming_platforms(user_id: UUID, db: Db) -> list[str]:
    return await get_user_streaming_platforms(db, str(user_id))


@router.post("/{user_id}/streaming-platforms", response_model=list[str])
async def add_streaming_platform_endpoint(
    user_id: UUID,
    data: StreamingPlatformUpdate,
    db: Db,
) -> list[str]:
    """Subscribe to a platform (see ``STREAMING_PLATFORM_LIST`` for codes)."""
    return await add_streaming_platform(db, str(user_id), data.platform)


@router.delete("/{user_id}/streaming-platforms/{platform}", response_model=list[str])
async def remove_streaming_platform_endpoint(
    user_id: UUID,
    platform: Annotated[str, Path(min_length=1)],
    db: Db,
) -> list[str]:
    return await remove_streaming_platform(db, str(user_id), platform)
