"""TMDB API integration for movie and TV metadata."""

import logging
from datetime import date, timedelta
from functools import lru_cache
from typing import Any

import httpx
import pydantic

from src.config import get_settings
from src.constants import (
    DEFAULT_LANGUAGE,
    RECENT_MOVIE_RELEASE_TYPES,
    RECENT_RELEASE_WINDOW_DAYS,
    TMDB_API_BASE_URL,
    TMDB_SEARCH_TYPES,
)
from src.errors import NotFoundError, UpstreamError, ValidationError
from src.models.schemas import CatalogItem, DiscoverPage, GenreRef, MediaType
from src.utils.http_client import get_tmdb_client

logger = logging.getLogger(__name__)


def _date_offset(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


class TMDBService:
    """Service for fetching movie and TV metadata from TMDB.

    Every call is a single request: no caching, no retry. A 404 becomes
    NotFoundError naming the missing entity; any other failure becomes
    UpstreamError.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key if api_key is not None else get_settings().tmdb_access_token
        # Support both API Read Access Token (v4 bearer) and API key v3
        if self.api_key.startswith("eyJ"):
            self.headers = {
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            }
            self.use_api_key_param = False
        else:
            self.headers = {"Accept": "application/json"}
            self.use_api_key_param = True

    def _add_api_key(self, params: dict) -> dict:
        """Add API key to params if using v3 key."""
        if self.use_api_key_param:
            params["api_key"] = self.api_key
        return params

    async def _get(self, path: str, params: dict[str, Any], entity: str) -> dict[str, Any]:
        """GET a TMDB resource and return the decoded JSON body.

        Args:
            path: Path below the API base URL, e.g. ``/movie/42``
            params: Query parameters (api key added when needed)
            entity: Human-readable name of the resource, used in NotFound messages
        """
        client = get_tmdb_client()
        try:
            response = await client.get(
                f"{TMDB_API_BASE_URL}{path}",
                params=self._add_api_key(params),
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"TMDB request {path} failed: {e}")
            raise UpstreamError(f"TMDB request failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"{entity} not found")
        if response.status_code != 200:
            logger.error(f"TMDB {path} answered {response.status_code}: {response.text[:200]}")
            raise UpstreamError(f"TMDB error {response.status_code} while fetching {entity}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"Malformed TMDB response for {entity}") from e
        if not isinstance(data, dict):
            raise UpstreamError(f"Malformed TMDB response for {entity}")
        return data

    @staticmethod
    def _to_page(data: dict[str, Any], entity: str) -> DiscoverPage:
        try:
            return DiscoverPage(
                items=[CatalogItem.model_validate(item) for item in data.get("results") or []],
                page=data.get("page") or 1,
                total_pages=data.get("total_pages") or 1,
                total_results=data.get("total_results") or 0,
            )
        except (pydantic.ValidationError, TypeError) as e:
            logger.error(f"Malformed TMDB {entity}: {e}")
            raise UpstreamError(f"Malformed TMDB response for {entity}") from e

    @staticmethod
    def _to_genres(data: dict[str, Any], entity: str) -> list[GenreRef]:
        try:
            return [GenreRef.model_validate(g) for g in data.get("genres") or []]
        except (pydantic.ValidationError, TypeError) as e:
            raise UpstreamError(f"Malformed genres in TMDB response for {entity}") from e

    async def discover(
        self,
        media_type: MediaType,
        *,
        language: str,
        page: int = 1,
        sort_by: str = "popularity.desc",
        vote_count_gte: int | None = None,
        date_gte: str | None = None,
        date_lte: str | None = None,
        with_genres: list[int] | None = None,
        with_watch_providers: list[int] | None = None,
        watch_region: str | None = None,
        extra_params: dict[str, str] | None = None,
    ) -> DiscoverPage:
        """Discover movies or TV shows with filters.

        Args:
            media_type: movie or tv
            language: Language for results
            page: Page number (1-based)
            sort_by: Sort order (popularity.desc, vote_average.desc, etc.)
            vote_count_gte: Minimum vote count
            date_gte: Earliest release (movie) or first air (tv) date, ISO format
            date_lte: Latest release/first air date, ISO format
            with_genres: Genre IDs, all required (comma-joined)
            with_watch_providers: Provider IDs, any of them (pipe-joined)
            watch_region: Country for provider filtering
            extra_params: Raw TMDB parameters added as-is

        Returns:
            One page of results with TMDB's paging info
        """
        date_field = "primary_release_date" if media_type == MediaType.MOVIE else "first_air_date"
        params: dict[str, Any] = {
            "language": language,
            "sort_by": sort_by,
            "include_adult": "false",
            "page": str(page),
        }

        if vote_count_gte is not None:
            params["vote_count.gte"] = str(vote_count_gte)
        if date_gte:
            params[f"{date_field}.gte"] = date_gte
        if date_lte:
            params[f"{date_field}.lte"] = date_lte
        if with_genres:
            params["with_genres"] = ",".join(str(g) for g in with_genres)
        if with_watch_providers:
            params["with_watch_providers"] = "|".join(str(p) for p in with_watch_providers)
            if watch_region:
                params["watch_region"] = watch_region
        if extra_params:
            params.update(extra_params)

        entity = f"{media_type.value} listing"
        data = await self._get(f"/discover/{media_type.value}", params, entity)
        return self._to_page(data, entity)

    async def get_recent_movies(self, language: str) -> list[CatalogItem]:
        """Popular movies released in theaters within the last/next 30 days."""
        page = await self.discover(
            MediaType.MOVIE,
            language=language,
            date_gte=_date_offset(-RECENT_RELEASE_WINDOW_DAYS),
            date_lte=_date_offset(RECENT_RELEASE_WINDOW_DAYS),
            extra_params={
                "include_video": "false",
                "with_release_type": RECENT_MOVIE_RELEASE_TYPES,
            },
        )
        return page.items

    async def get_recent_tv_shows(self, language: str) -> list[CatalogItem]:
        """Popular TV shows first aired within the last/next 30 days."""
        page = await self.discover(
            MediaType.TV,
            language=language,
            date_gte=_date_offset(-RECENT_RELEASE_WINDOW_DAYS),
            date_lte=_date_offset(RECENT_RELEASE_WINDOW_DAYS),
            extra_params={"include_null_first_air_dates": "false"},
        )
        return page.items

    async def get_details(self, media_id: int, media_type: MediaType, language: str) -> dict[str, Any]:
        """Full detail record of a movie or TV show."""
        label = "Movie" if media_type == MediaType.MOVIE else "TV show"
        return await self._get(
            f"/{media_type.value}/{media_id}",
            {"language": language},
            f"{label} with ID {media_id}",
        )

    async def get_movie_details(self, movie_id: int, language: str) -> dict[str, Any]:
        return await self.get_details(movie_id, MediaType.MOVIE, language)

    async def get_tv_details(self, tv_id: int, language: str) -> dict[str, Any]:
        return await self.get_details(tv_id, MediaType.TV, language)

    async def get_genres(self, media_id: int, media_type: MediaType, language: str) -> list[GenreRef]:
        """Genres of a single title (raises NotFoundError for unknown ids)."""
        details = await self.get_details(media_id, media_type, language)
        return self._to_genres(details, f"{media_type.value} {media_id}")

    async def get_season_details(self, tv_id: int, season_number: int, language: str) -> dict[str, Any]:
        """Season record including its episode list."""
        return await self._get(
            f"/tv/{tv_id}/season/{season_number}",
            {"language": language},
            f"Season {season_number} of TV show {tv_id}",
        )

    async def get_episode_details(
        self,
        tv_id: int,
        season_number: int,
        episode_number: int,
        language: str,
    ) -> dict[str, Any]:
        """Single episode record."""
        return await self._get(
            f"/tv/{tv_id}/season/{season_number}/episode/{episode_number}",
            {"language": language},
            f"Episode {episode_number} of season {season_number} of TV show {tv_id}",
        )

    async def get_person_details(self, person_id: int, language: str) -> dict[str, Any]:
        """Person record with movie and TV credits."""
        return await self._get(
            f"/person/{person_id}",
            {"language": language, "append_to_response": "combined_credits"},
            f"Person with ID {person_id}",
        )

    async def search(
        self,
        query: str,
        media_type: str = "multi",
        language: str = DEFAULT_LANGUAGE,
        page: int = 1,
    ) -> DiscoverPage:
        """Search movies, TV shows, people, or all of them (``multi``)."""
        if media_type not in TMDB_SEARCH_TYPES:
            raise ValidationError(
                f"Invalid search type '{media_type}'. Supported: {', '.join(TMDB_SEARCH_TYPES)}"
            )
        if not query.strip():
            raise ValidationError("Search query must not be empty")

        data = await self._get(
            f"/search/{media_type}",
            {
                "query": query,
                "language": language,
                "include_adult": "false",
                "page": str(page),
            },
            f"{media_type} search results",
        )
        return self._to_page(data, f"{media_type} search results")

    async def get_genre_list(self, media_type: MediaType, language: str) -> list[GenreRef]:
        """All official genres for movies or TV."""
        data = await self._get(
            f"/genre/{media_type.value}/list",
            {"language": language},
            f"{media_type.value} genre list",
        )
        return self._to_genres(data, f"{media_type.value} genre list")


@lru_cache
def get_tmdb_service() -> TMDBService:
    """Shared TMDBService instance (FastAPI dependency)."""
    return TMDBService()
