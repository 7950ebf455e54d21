"""Media API endpoints: TMDB proxy and personalized recommendations."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query
from supabase import AsyncClient

from src.constants import DEFAULT_LANGUAGE, DEFAULT_PAGE, DEFAULT_RECOMMENDATION_LIMIT
from src.db import get_db
from src.errors import ValidationError
from src.models.schemas import CatalogItem, DiscoverPage, GenreRef, MediaType
from src.services.metadata import TMDBService, get_tmdb_service
from src.services.recommendations import RecommendationEngine

router = APIRouter()

Lang = Annotated[str, Query(alias="lang")]
Catalog = Annotated[TMDBService, Depends(get_tmdb_service)]


def get_recommendation_engine(
    db: Annotated[AsyncClient, Depends(get_db)],
    catalog: Catalog,
) -> RecommendationEngine:
    return RecommendationEngine(db, catalog)


def parse_media_type(value: str) -> MediaType:
    """Parse a ``movie``/``tv`` query value, raising a 400 on anything else."""
    try:
        return MediaType(value)
    except ValueError:
        raise ValidationError(f"Invalid mediaType '{value}'. Use 'movie' or 'tv'") from None


@router.get("/movies/recent", response_model=list[CatalogItem])
async def get_recent_movies(catalog: Catalog, lang: Lang = DEFAULT_LANGUAGE) -> list[CatalogItem]:
    """Popular movies released in theaters around today."""
    return await catalog.get_recent_movies(lang)


@router.get("/tv/recent", response_model=list[CatalogItem])
async def get_recent_tv_shows(catalog: Catalog, lang: Lang = DEFAULT_LANGUAGE) -> list[CatalogItem]:
    """Popular TV shows first aired around today."""
    return await catalog.get_recent_tv_shows(lang)


@router.get("/movies/detail/{movie_id}")
async def get_movie_details(
    movie_id: Annotated[int, Path(ge=1)],
    catalog: Catalog,
    lang: Lang = DEFAULT_LANGUAGE,
) -> dict[str, Any]:
    return await catalog.get_movie_details(movie_id, lang)


@router.get("/tv/detail/{tv_id}")
async def get_tv_details(
    tv_id: Annotated[int, Path(ge=1)],
    catalog: Catalog,
    lang: Lang = DEFAULT_LANGUAGE,
) -> dict[str, Any]:
    return await catalog.get_tv_details(tv_id, lang)


@router.get("/tv/{tv_id}/season/{season_number}")
async def get_season_details(
    tv_id: Annotated[int, Path(ge=1)],
    season_number: Annotated[int, Path(ge=0)],
    catalog: Catalog,
    lang: Lang = DEFAULT_LANGUAGE,
) -> dict[str, Any]:
    """Season with its episodes (season 0 holds specials)."""
    return await catalog.get_season_details(tv_id, season_number, lang)


@router.get("/tv/{tv_id}/season/{season_number}/episode/{episode_number}")
async def get_episode_details(
    tv_id: Annotated[int, Path(ge=1)],
    season_number: Annotated[int, Path(ge=0)],
    episode_number: Annotated[int, Path(ge=1)],
    catalog: Catalog,
    lang: Lang = DEFAULT_LANGUAGE,
) -> dict[str, Any]:
    return await catalog.get_episode_details(tv_id, season_number, episode_number, lang)


@router.get("/person/{person_id}")
async def get_person_details(
    person_id: Annotated[int, Path(ge=1)],
    catalog: Catalog,
    lang: Lang = DEFAULT_LANGUAGE,
) -> dict[str, Any]:
    """Person with combined movie and TV credits."""
    return await catalog.get_person_details(person_id, lang)


@router.get("/search", response_model=DiscoverPage)
async def search_media(
    catalog: Catalog,
    query: Annotated[str, Query(min_length=1, max_length=200)],
    type: Annotated[str, Query()] = "multi",
    lang: Lang = DEFAULT_LANGUAGE,
    page: Annotated[int, Query(ge=1)] = 1,
) -> DiscoverPage:
    """Search movies, TV shows, people, or everything at once."""
    return await catalog.search(query, type, lang, page)


@router.get("/genres/{media_type}", response_model=list[GenreRef])
async def get_genre_list(
    media_type: MediaType,
    catalog: Catalog,
    lang: Lang = DEFAULT_LANGUAGE,
) -> list[GenreRef]:
    return await catalog.get_genre_list(media_type, lang)


@router.get("/recommendations", response_model=list[CatalogItem])
async def get_recommendations(
    engine: Annotated[RecommendationEngine, Depends(get_recommendation_engine)],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    media_type: Annotated[str, Query(alias="mediaType")] = MediaType.MOVIE.value,
    lang: Lang = DEFAULT_LANGUAGE,
    page: Annotated[int, Query()] = DEFAULT_PAGE,
    limit: Annotated[int, Query()] = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[CatalogItem]:
    """Personalized recommendations the user has not rated yet."""
    if not user_id:
        raise ValidationError("userId is required")
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")

    return await engine.get_recommendations(
        user_id,
        parse_media_type(media_type),
        lang,
        page=page,
        limit=limit,
    )
