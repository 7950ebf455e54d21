"""Recommendation engine for generating personalized recommendations."""

import logging
import math
import random

from supabase import AsyncClient

from src.config import get_settings
from src.constants import (
    DISCOVERY_DATE_FLOOR,
    DISCOVERY_EXTRA_PAGES,
    DISCOVERY_MIN_VOTES,
    DISCOVERY_SORT,
    FALLBACK_DATE_FLOOR,
    FALLBACK_MIN_VOTES,
    FALLBACK_PAGES,
    FALLBACK_RESULT_SIZE,
    FAVORITE_GENRE_WEIGHT,
    HIGH_RATING_THRESHOLD,
    MAX_RECOMMENDATION_GENRES,
    STREAMING_PROVIDER_IDS,
    TMDB_MAX_PAGE,
    TMDB_PAGE_SIZE,
)
from src.db.crud import (
    get_favorite_genres,
    get_high_rated_media,
    get_user_ratings,
    get_user_streaming_platforms,
)
from src.errors import DomainError, NotFoundError, RecommendationError, UpstreamError, ValidationError
from src.models.schemas import CatalogItem, InteractionRecord, MediaType
from src.services.metadata.tmdb import TMDBService
from src.utils.logging import LogContext

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Engine for generating personalized movie and TV recommendations.

    Strategy:
    1. Tally genres of the user's highly rated titles (+1 each) and declared
       favorite genres (+3 each), keep the top 2
    2. Discover titles in those genres, best rated first, optionally limited
       to the user's streaming platforms
    3. Without any genre signal, fall back to a shuffled pool of acclaimed titles
    4. Never return a title the user already rated

    The engine keeps no state between calls.
    """

    def __init__(
        self,
        db: AsyncClient,
        catalog: TMDBService,
        rng: random.Random | None = None,
    ):
        self.db = db
        self.catalog = catalog
        self.rng = rng or random.Random()

    async def get_recommendations(
        self,
        user_id: str,
        media_type: MediaType,
        language: str,
        page: int = 1,
        limit: int = 20,
    ) -> list[CatalogItem]:
        """Recommend up to ``limit`` unseen titles of ``media_type`` for a user.

        Raises:
            ValidationError: page or limit below 1
            RecommendationError: any store or catalog failure along the way
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")

        log = LogContext(logger, user_id=user_id, media_type=media_type.value)

        try:
            high_rated = await get_high_rated_media(
                self.db, user_id, HIGH_RATING_THRESHOLD, media_type
            )
            rated = await get_user_ratings(self.db, user_id, media_type)
            excluded_ids = {r.media_id for r in rated}
            favorites = await get_favorite_genres(self.db, user_id)

            top_genres = await self._get_top_genres(
                high_rated, favorites.for_media_type(media_type), media_type, language, log
            )

            if not top_genres:
                log.info("No genre signal, using popular fallback")
                pool = await self._get_popular_fallback(media_type, language)
                return [item for item in pool if item.id not in excluded_ids][:limit]

            platforms = await get_user_streaming_platforms(self.db, user_id)
            items = await self._discover_by_genres(
                top_genres,
                excluded_ids,
                media_type,
                language,
                page,
                limit,
                self._to_provider_ids(platforms, log),
            )
        except DomainError as e:
            log.error(f"Recommendation pipeline failed: {e.message}")
            raise RecommendationError(e.message) from e

        log.info(f"Returning {min(len(items), limit)} recommendations (genres {top_genres})")
        return items[:limit]

    async def _get_top_genres(
        self,
        high_rated: list[InteractionRecord],
        favorite_genres: list[int],
        media_type: MediaType,
        language: str,
        log: LogContext,
    ) -> list[int]:
        """Score genres from rating history and favorites, return the best ones.

        Lookups run one title at a time; a title the catalog cannot resolve
        is skipped.
        """
        scores: dict[int, int] = {}

        for interaction in high_rated:
            try:
                genres = await self.catalog.get_genres(interaction.media_id, media_type, language)
            except (NotFoundError, UpstreamError) as e:
                log.debug(f"Skipping genres of {interaction.media_id}: {e.message}")
                continue
            for genre in genres:
                scores[genre.id] = scores.get(genre.id, 0) + 1

        for genre_id in favorite_genres:
            scores[genre_id] = scores.get(genre_id, 0) + FAVORITE_GENRE_WEIGHT

        # sorted() is stable: equal scores keep first-seen order
        ranked = sorted(scores.items(), key=lambda x: x[1], reverse=True)
        log.debug(f"Genre scores: {ranked}")
        return [genre_id for genre_id, _ in ranked[:MAX_RECOMMENDATION_GENRES]]

    async def _discover_by_genres(
        self,
        genre_ids: list[int],
        excluded_ids: set[int],
        media_type: MediaType,
        language: str,
        start_page: int,
        limit: int,
        provider_ids: list[int],
    ) -> list[CatalogItem]:
        """Walk discover pages until ``limit`` unseen titles are collected.

        Extra pages absorb titles lost to the exclusion filter. Stops early
        once TMDB reports no further pages, and never asks past the last page
        TMDB serves.
        """
        max_pages = math.ceil(limit / TMDB_PAGE_SIZE) + DISCOVERY_EXTRA_PAGES
        last_page = min(start_page + max_pages - 1, TMDB_MAX_PAGE)
        watch_region = get_settings().watch_region if provider_ids else None
        results: list[CatalogItem] = []

        for current_page in range(start_page, last_page + 1):
            discovered = await self.catalog.discover(
                media_type,
                language=language,
                page=current_page,
                sort_by=DISCOVERY_SORT,
                vote_count_gte=DISCOVERY_MIN_VOTES[media_type.value],
                date_gte=DISCOVERY_DATE_FLOOR,
                with_genres=genre_ids,
                with_watch_providers=provider_ids or None,
                watch_region=watch_region,
            )
            results.extend(item for item in discovered.items if item.id not in excluded_ids)

            if len(results) >= limit or discovered.page >= discovered.total_pages:
                break

        return results

    async def _get_popular_fallback(self, media_type: MediaType, language: str) -> list[CatalogItem]:
        """Shuffled pool of acclaimed titles for users without any genre signal."""
        pool: list[CatalogItem] = []
        for current_page in range(1, FALLBACK_PAGES + 1):
            discovered = await self.catalog.discover(
                media_type,
                language=language,
                page=current_page,
                sort_by=DISCOVERY_SORT,
                vote_count_gte=FALLBACK_MIN_VOTES[media_type.value],
                date_gte=FALLBACK_DATE_FLOOR,
            )
            pool.extend(discovered.items)

        self.rng.shuffle(pool)
        return pool[:FALLBACK_RESULT_SIZE]

    @staticmethod
    def _to_provider_ids(platforms: list[str], log: LogContext) -> list[int]:
        """Map platform slugs to TMDB watch-provider ids."""
        provider_ids = []
        for platform in platforms:
            if platform in STREAMING_PROVIDER_IDS:
                provider_ids.append(STREAMING_PROVIDER_IDS[platform])
            elif platform.isdigit():
                provider_ids.append(int(platform))
            else:
                log.debug(f"Unknown streaming platform '{platform}', not filtering on it")
        return provider_ids
