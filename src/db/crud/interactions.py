"""Read queries over the UserMediaInteractions collection."""

from supabase import AsyncClient

from src.constants import HIGH_RATING_THRESHOLD, TABLE_INTERACTIONS, TABLE_PROFILES
from src.db.database import run_query, validate_rows
from src.errors import NotFoundError
from src.models.schemas import InteractionRecord, MediaRating, MediaType


def _to_records(rows: list[dict] | None) -> list[InteractionRecord]:
    return validate_rows(InteractionRecord, rows, "interaction")


async def get_user_interactions(db: AsyncClient, user_id: str) -> list[InteractionRecord]:
    """All interactions of a user, newest first."""
    res = await run_query(
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return _to_records(res.data)


async def get_interaction(db: AsyncClient, interaction_id: str) -> InteractionRecord:
    """Get a single interaction by id."""
    res = await run_query(
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("id", interaction_id)
        .limit(1)
        .execute()
    )
    if not res.data:
        raise NotFoundError(f"Interaction with ID {interaction_id} not found")
    return _to_records(res.data[:1])[0]


async def get_interaction_by_details(
    db: AsyncClient,
    user_id: str,
    media_id: int,
    media_type: MediaType,
    season_number: int | None = None,
    episode_number: int | None = None,
) -> InteractionRecord | None:
    """Find the interaction for one title, season or episode.

    A missing season/episode number matches rows where that column is null,
    so asking without numbers returns the whole-title interaction only.
    """
    query = (
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .eq("media_id", media_id)
        .eq("media_type", media_type.value)
    )

    if season_number is not None:
        query = query.eq("season_number", season_number)
    else:
        query = query.is_("season_number", None)

    if episode_number is not None:
        query = query.eq("episode_number", episode_number)
    else:
        query = query.is_("episode_number", None)

    res = await run_query(query.limit(1).execute())
    if not res.data:
        return None
    return _to_records(res.data[:1])[0]


async def get_episode_ratings(
    db: AsyncClient,
    user_id: str,
    media_id: int,
    season_number: int | None = None,
) -> list[InteractionRecord]:
    """Rated episodes of a show, ordered by season then episode."""
    query = (
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .eq("media_id", media_id)
        .eq("media_type", MediaType.TV.value)
        .not_.is_("episode_number", None)
        .not_.is_("rating", None)
    )
    if season_number is not None:
        query = query.eq("season_number", season_number)

    res = await run_query(
        query.order("season_number").order("episode_number").execute()
    )
    return _to_records(res.data)


async def get_season_ratings(db: AsyncClient, user_id: str, media_id: int) -> list[InteractionRecord]:
    """Rated seasons (not episodes) of a show, ordered by season."""
    res = await run_query(
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .eq("media_id", media_id)
        .eq("media_type", MediaType.TV.value)
        .not_.is_("season_number", None)
        .is_("episode_number", None)
        .not_.is_("rating", None)
        .order("season_number")
        .execute()
    )
    return _to_records(res.data)


async def get_user_ratings(
    db: AsyncClient,
    user_id: str,
    media_type: MediaType | None = None,
) -> list[InteractionRecord]:
    """Every rated interaction of a user (any scope), best rated first."""
    query = (
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .not_.is_("rating", None)
    )
    if media_type is not None:
        query = query.eq("media_type", media_type.value)

    res = await run_query(query.order("rating", desc=True).execute())
    return _to_records(res.data)


async def get_user_comments(db: AsyncClient, user_id: str) -> list[InteractionRecord]:
    """Interactions carrying a comment, newest first."""
    res = await run_query(
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .not_.is_("comment", None)
        .order("created_at", desc=True)
        .execute()
    )
    return _to_records(res.data)


async def get_media_ratings(
    db: AsyncClient,
    media_id: int,
    media_type: MediaType,
    season_number: int | None = None,
    episode_number: int | None = None,
) -> list[MediaRating]:
    """All users' ratings for a title, season or episode, with usernames."""
    query = (
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("media_id", media_id)
        .eq("media_type", media_type.value)
        .not_.is_("rating", None)
    )

    if season_number is None and episode_number is None:
        query = query.is_("season_number", None).is_("episode_number", None)
    else:
        if season_number is not None:
            query = query.eq("season_number", season_number)
        if episode_number is not None:
            query = query.eq("episode_number", episode_number)
        else:
            query = query.is_("episode_number", None)

    res = await run_query(query.order("rating", desc=True).execute())
    rows = res.data or []
    if not rows:
        return []

    user_ids = sorted({row["user_id"] for row in rows if row.get("user_id")})
    usernames: dict[str, str | None] = {}
    if user_ids:
        profiles = await run_query(
            db.table(TABLE_PROFILES)
            .select("id, username")
            .in_("id", user_ids)
            .execute()
        )
        usernames = {p["id"]: p.get("username") for p in profiles.data or []}

    return validate_rows(
        MediaRating,
        [{**row, "username": usernames.get(row.get("user_id"))} for row in rows],
        "interaction",
    )


async def get_high_rated_media(
    db: AsyncClient,
    user_id: str,
    min_rating: int = HIGH_RATING_THRESHOLD,
    media_type: MediaType | None = None,
) -> list[InteractionRecord]:
    """Whole-title interactions of a user rated at least ``min_rating``."""
    query = (
        db.table(TABLE_INTERACTIONS)
        .select("*")
        .eq("user_id", user_id)
        .gte("rating", min_rating)
        .is_("season_number", None)
        .is_("episode_number", None)
        .not_.is_("rating", None)
    )
    if media_type is not None:
        query = query.eq("media_type", media_type.value)

    res = await run_query(query.order("rating", desc=True).execute())
    return _to_records(res.data)


async def get_ratings_count(db: AsyncClient) -> int:
    """Total number of interactions stored."""
    res = await run_query(
        db.table(TABLE_INTERACTIONS)
        .select("*", count="exact", head=True)
        .execute()
    )
    return res.count or 0
