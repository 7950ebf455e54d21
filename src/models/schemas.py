"""Pydantic schemas for API validation and serialization."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.constants import RATING_MAX, RATING_MIN


class MediaType(str, Enum):
    """Media kinds supported by the catalog."""

    MOVIE = "movie"
    TV = "tv"


class UserRole(str, Enum):
    """Profile roles."""

    USER = "user"
    ADMIN = "admin"
    DELETED = "deleted"


# Catalog schemas
class GenreRef(BaseModel):
    """Genre reference as returned by TMDB."""

    id: int
    name: str = ""


class CatalogItem(BaseModel):
    """Movie or TV listing entry from TMDB.

    Movies carry ``title``/``release_date``, TV shows ``name``/``first_air_date``.
    Unknown TMDB fields (genre_ids, popularity, ...) are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    title: str | None = None
    name: str | None = None
    overview: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    poster_path: str | None = None
    vote_average: float | None = None


class DiscoverPage(BaseModel):
    """One page of a TMDB listing (discover or search)."""

    items: list[CatalogItem]
    page: int = 1
    total_pages: int = 1
    total_results: int = 0


# Interaction schemas
class InteractionRecord(BaseModel):
    """A user's rating/comment on a title, a season or a single episode."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str | None = None
    user_id: str | None = None
    media_id: int
    media_type: MediaType
    rating: int | None = Field(default=None, ge=RATING_MIN, le=RATING_MAX)
    comment: str | None = None
    season_number: int | None = Field(default=None, ge=1)
    episode_number: int | None = Field(default=None, ge=1)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def check_episode_scope(self) -> "InteractionRecord":
        """Movies have no seasons; episodes need a season."""
        if self.media_type == MediaType.MOVIE and (
            self.season_number is not None or self.episode_number is not None
        ):
            raise ValueError("movie interactions cannot carry season or episode numbers")
        if self.episode_number is not None and self.season_number is None:
            raise ValueError("episode interactions require a season number")
        return self

    @property
    def is_whole_title(self) -> bool:
        return self.season_number is None and self.episode_number is None


class MediaRating(InteractionRecord):
    """Interaction enriched with the rater's username."""

    username: str | None = None


class RatingsCount(BaseModel):
    count: int


# Profile schemas
class FavoriteGenres(BaseModel):
    """Explicit genre preferences of a user."""

    movie_genres: list[int] = []
    tv_genres: list[int] = []

    def for_media_type(self, media_type: MediaType) -> list[int]:
        return self.movie_genres if media_type == MediaType.MOVIE else self.tv_genres


class UserProfile(BaseModel):
    """Profile row of the UserProfiles collection."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str
    email: str | None = None
    username: str | None = None
    role: UserRole = UserRole.USER
    favorite_movie_genres: list[int] = []
    favorite_tv_genres: list[int] = []
    streaming_platforms: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("favorite_movie_genres", "favorite_tv_genres", "streaming_platforms", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """Preference columns are nullable in the store."""
        return [] if v is None else v


class UserSummary(BaseModel):
    """Public listing of a user account."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    username: str | None = None
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FavoriteGenreUpdate(BaseModel):
    """Body for adding/removing a favorite genre."""

    genre_id: int = Field(ge=1)
    media_type: MediaType


class StreamingPlatformUpdate(BaseModel):
    """Body for adding/removing a streaming platform."""

    platform: str = Field(min_length=1)


class AccountDeletionResult(BaseModel):
    success: bool
    error: str | None = None
