"""Operations on the UserProfiles collection."""

import logging
import time
from datetime import UTC, datetime
from typing import Any

from supabase import AsyncClient

from src.constants import STREAMING_PLATFORM_LIST, TABLE_PROFILES
from src.db.database import run_query, validate_rows
from src.errors import DomainError, ForbiddenError, NotFoundError, UpstreamError, ValidationError
from src.models.schemas import (
    AccountDeletionResult,
    FavoriteGenres,
    MediaType,
    UserProfile,
    UserRole,
    UserSummary,
)

logger = logging.getLogger(__name__)


def _genre_field(media_type: MediaType) -> str:
    return "favorite_movie_genres" if media_type == MediaType.MOVIE else "favorite_tv_genres"


def _to_base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    result = ""
    while value:
        value, rem = divmod(value, 36)
        result = digits[rem] + result
    return result or "0"


async def get_user_profile(db: AsyncClient, user_id: str) -> UserProfile | None:
    """Get a profile by user id, or None if it does not exist."""
    res = await run_query(
        db.table(TABLE_PROFILES)
        .select("*")
        .eq("id", user_id)
        .limit(1)
        .execute()
    )
    if not res.data:
        return None
    return validate_rows(UserProfile, res.data[:1], "profile")[0]


async def get_user_profile_or_raise(db: AsyncClient, user_id: str) -> UserProfile:
    """Get a profile by user id, raising NotFoundError if missing."""
    profile = await get_user_profile(db, user_id)
    if profile is None:
        raise NotFoundError(f"User profile with ID {user_id} not found")
    return profile


async def update_user_profile(db: AsyncClient, user_id: str, changes: dict[str, Any]) -> UserProfile:
    """Apply a partial update to a profile and return the stored row."""
    payload = {**changes, "updated_at": datetime.now(UTC).isoformat()}
    res = await run_query(
        db.table(TABLE_PROFILES)
        .update(payload)
        .eq("id", user_id)
        .execute()
    )
    if not res.data:
        raise NotFoundError(f"User profile with ID {user_id} not found")
    return validate_rows(UserProfile, res.data[:1], "profile")[0]


async def get_favorite_genres(db: AsyncClient, user_id: str) -> FavoriteGenres:
    """Declared favorite genres, split by media type."""
    profile = await get_user_profile_or_raise(db, user_id)
    return FavoriteGenres(
        movie_genres=profile.favorite_movie_genres,
        tv_genres=profile.favorite_tv_genres,
    )


async def add_favorite_genre(
    db: AsyncClient,
    user_id: str,
    genre_id: int,
    media_type: MediaType,
) -> FavoriteGenres:
    """Add a favorite genre; adding an existing one is a no-op."""
    profile = await get_user_profile_or_raise(db, user_id)
    field = _genre_field(media_type)
    current: list[int] = getattr(profile, field)

    if genre_id not in current:
        profile = await update_user_profile(db, user_id, {field: [*current, genre_id]})

    return FavoriteGenres(
        movie_genres=profile.favorite_movie_genres,
        tv_genres=profile.favorite_tv_genres,
    )


async def remove_favorite_genre(
    db: AsyncClient,
    user_id: str,
    genre_id: int,
    media_type: MediaType,
) -> FavoriteGenres:
    """Remove a favorite genre if present."""
    profile = await get_user_profile_or_raise(db, user_id)
    field = _genre_field(media_type)
    current: list[int] = getattr(profile, field)

    if genre_id in current:
        profile = await update_user_profile(
            db, user_id, {field: [g for g in current if g != genre_id]}
        )

    return FavoriteGenres(
        movie_genres=profile.favorite_movie_genres,
        tv_genres=profile.favorite_tv_genres,
    )


async def get_user_streaming_platforms(db: AsyncClient, user_id: str) -> list[str]:
    """Streaming platform codes the user subscribes to."""
    profile = await get_user_profile_or_raise(db, user_id)
    return profile.streaming_platforms


async def add_streaming_platform(db: AsyncClient, user_id: str, platform: str) -> list[str]:
    """Add a streaming platform code; unknown codes are rejected."""
    if platform not in STREAMING_PLATFORM_LIST:
        raise ValidationError(
            f"Unknown streaming platform '{platform}'. Supported: {', '.join(STREAMING_PLATFORM_LIST)}"
        )

    profile = await get_user_profile_or_raise(db, user_id)
    current = profile.streaming_platforms

    if platform not in current:
        profile = await update_user_profile(db, user_id, {"streaming_platforms": [*current, platform]})

    return profile.streaming_platforms


async def remove_streaming_platform(db: AsyncClient, user_id: str, platform: str) -> list[str]:
    """Remove a streaming platform code if present."""
    profile = await get_user_profile_or_raise(db, user_id)
    current = profile.streaming_platforms

    if platform in current:
        profile = await update_user_profile(
            db, user_id, {"streaming_platforms": [p for p in current if p != platform]}
        )

    return profile.streaming_platforms


async def get_all_users(db: AsyncClient) -> list[UserSummary]:
    """Regular (role ``user``) accounts, newest first."""
    res = await run_query(
        db.table(TABLE_PROFILES)
        .select("id, created_at, updated_at, email, username, role")
        .eq("role", UserRole.USER.value)
        .order("created_at", desc=True)
        .execute()
    )
    return validate_rows(UserSummary, res.data, "profile")


async def delete_user_account(
    db: AsyncClient,
    admin_db: AsyncClient,
    user_id: str,
) -> AccountDeletionResult:
    """Anonymize a user's profile and delete the auth account.

    Only accounts with role ``user`` may be deleted. Failures are reported in
    the result instead of raised, so the caller always gets a status.
    """
    try:
        profile = await get_user_profile_or_raise(db, user_id)

        if profile.role != UserRole.USER:
            raise ForbiddenError('Only users with the "user" role can delete their account')

        anonymous_username = f"deleted_user_{_to_base36(int(time.time() * 1000))}"
        await update_user_profile(
            db,
            user_id,
            {"username": anonymous_username, "email": "", "role": UserRole.DELETED.value},
        )

        try:
            await admin_db.auth.admin.delete_user(user_id)
        except Exception as e:
            raise UpstreamError(f"Error deleting authentication account: {e}") from e

        logger.info(f"Deleted account for user {user_id}")
        return AccountDeletionResult(success=True)

    except DomainError as e:
        logger.error(f"Error deleting account for user {user_id}: {e.message}")
        return AccountDeletionResult(success=False, error=e.message)
