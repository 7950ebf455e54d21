"""Pydantic models shared across the API, stores and services."""

from src.models.schemas import (
    AccountDeletionResult,
    CatalogItem,
    DiscoverPage,
    FavoriteGenres,
    GenreRef,
    InteractionRecord,
    MediaRating,
    MediaType,
    RatingsCount,
    UserProfile,
    UserRole,
    UserSummary,
)

__all__ = [
    "AccountDeletionResult",
    "CatalogItem",
    "DiscoverPage",
    "FavoriteGenres",
    "GenreRef",
    "InteractionRecord",
    "MediaRating",
    "MediaType",
    "RatingsCount",
    "UserProfile",
    "UserRole",
    "UserSummary",
]
