"""Store operations over Supabase collections."""

from src.db.crud.interactions import (
    get_episode_ratings,
    get_high_rated_media,
    get_interaction,
    get_interaction_by_details,
    get_media_ratings,
    get_ratings_count,
    get_season_ratings,
    get_user_comments,
    get_user_interactions,
    get_user_ratings,
)
from src.db.crud.profiles import (
    add_favorite_genre,
    add_streaming_platform,
    delete_user_account,
    get_all_users,
    get_favorite_genres,
    get_user_profile,
    get_user_profile_or_raise,
    get_user_streaming_platforms,
    remove_favorite_genre,
    remove_streaming_platform,
    update_user_profile,
)

__all__ = [
    # Interactions
    "get_episode_ratings",
    "get_high_rated_media",
    "get_interaction",
    "get_interaction_by_details",
    "get_media_ratings",
    "get_ratings_count",
    "get_season_ratings",
    "get_user_comments",
    "get_user_interactions",
    "get_user_ratings",
    # Profiles
    "add_favorite_genre",
    "add_streaming_platform",
    "delete_user_account",
    "get_all_users",
    "get_favorite_genres",
    "get_user_profile",
    "get_user_profile_or_raise",
    "get_user_streaming_platforms",
    "remove_favorite_genre",
    "remove_streaming_platform",
    "update_user_profile",
]
