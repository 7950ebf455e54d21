"""User media interaction read endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from supabase import AsyncClient

from src.db import get_db
from src.db.crud import (
    get_episode_ratings,
    get_interaction,
    get_interaction_by_details,
    get_media_ratings,
    get_ratings_count,
    get_season_ratings,
    get_user_comments,
    get_user_interactions,
    get_user_ratings,
)
from src.models.schemas import InteractionRecord, MediaRating, MediaType, RatingsCount

router = APIRouter()

Db = Annotated[AsyncClient, Depends(get_db)]
MediaId = Annotated[int, Path(ge=1)]
SeasonQuery = Annotated[int | None, Query(alias="seasonNumber", ge=1)]
EpisodeQuery = Annotated[int | None, Query(alias="episodeNumber", ge=1)]


@router.get("/count", response_model=RatingsCount)
async def count_interactions(db: Db) -> RatingsCount:
    """Total number of stored interactions."""
    return RatingsCount(count=await get_ratings_count(db))


@router.get("/user/{user_id}", response_model=list[InteractionRecord])
async def list_user_interactions(user_id: UUID, db: Db) -> list[InteractionRecord]:
    return await get_user_interactions(db, str(user_id))


@router.get("/user/{user_id}/media/{media_id}", response_model=InteractionRecord | None)
async def get_user_media_interaction(
    user_id: UUID,
    media_id: MediaId,
    db: Db,
    media_type: Annotated[MediaType, Query(alias="mediaType")] = MediaType.MOVIE,
) -> InteractionRecord | None:
    """Whole-title interaction of a user, or null if they never interacted."""
    return await get_interaction_by_details(db, str(user_id), media_id, media_type)


@router.get("/user/{user_id}/media/{media_id}/details", response_model=InteractionRecord | None)
async def get_user_media_interaction_details(
    user_id: UUID,
    media_id: MediaId,
    db: Db,
    media_type: Annotated[MediaType, Query(alias="mediaType")] = MediaType.MOVIE,
    season_number: SeasonQuery = None,
    episode_number: EpisodeQuery = None,
) -> InteractionRecord | None:
    """Interaction for a title, a season, or a single episode."""
    return await get_interaction_by_details(
        db, str(user_id), media_id, media_type, season_number, episode_number
    )


@router.get("/user/{user_id}/media/{media_id}/episodes/ratings", response_model=list[InteractionRecord])
async def list_episode_ratings(
    user_id: UUID,
    media_id: MediaId,
    db: Db,
    season_number: SeasonQuery = None,
) -> list[InteractionRecord]:
    return await get_episode_ratings(db, str(user_id), media_id, season_number)


@router.get("/user/{user_id}/media/{media_id}/seasons/ratings", response_model=list[InteractionRecord])
async def list_season_ratings(user_id: UUID, media_id: MediaId, db: Db) -> list[InteractionRecord]:
    return await get_season_ratings(db, str(user_id), media_id)


@router.get("/user/{user_id}/ratings", response_model=list[InteractionRecord])
async def list_user_ratings(
    user_id: UUID,
    db: Db,
    media_type: Annotated[MediaType | None, Query(alias="mediaType")] = None,
) -> list[InteractionRecord]:
    """Every rating of a user, best first."""
    return await get_user_ratings(db, str(user_id), media_type)


@router.get("/user/{user_id}/comments", response_model=list[InteractionRecord])
async def list_user_comments(user_id: UUID, db: Db) -> list[InteractionRecord]:
    return await get_user_comments(db, str(user_id))


@router.get("/media/{media_id}/ratings", response_model=list[MediaRating])
async def list_media_ratings(
    media_id: MediaId,
    db: Db,
    media_type: Annotated[MediaType, Query(alias="mediaType")] = MediaType.MOVIE,
    season_number: SeasonQuery = None,
    episode_number: EpisodeQuery = None,
) -> list[MediaRating]:
    """Ratings of every user for a title, season or episode."""
    return await get_media_ratings(db, media_id, media_type, season_number, episode_number)


@router.get("/{interaction_id}", response_model=InteractionRecord)
async def get_interaction_endpoint(interaction_id: UUID, db: Db) -> InteractionRecord:
    return await get_interaction(db, str(interaction_id))
