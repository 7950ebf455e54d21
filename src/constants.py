"""Application constants - centralized configuration values."""

# =============================================================================
# Request defaults
# =============================================================================
DEFAULT_LANGUAGE = "es-ES"
DEFAULT_RECOMMENDATION_LIMIT = 20
DEFAULT_PAGE = 1

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0

# =============================================================================
# Media Types
# =============================================================================
TMDB_SEARCH_TYPES = ("movie", "tv", "person", "multi")

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"

# =============================================================================
# Catalog
# =============================================================================
TMDB_PAGE_SIZE = 20  # results per discover page
TMDB_MAX_PAGE = 500  # discover rejects later pages
RECENT_RELEASE_WINDOW_DAYS = 30
RECENT_MOVIE_RELEASE_TYPES = "2|3"  # theatrical (limited) | theatrical

# =============================================================================
# Recommendations
# =============================================================================
HIGH_RATING_THRESHOLD = 7
FAVORITE_GENRE_WEIGHT = 3
MAX_RECOMMENDATION_GENRES = 2
DISCOVERY_EXTRA_PAGES = 2
DISCOVERY_SORT = "vote_average.desc"
DISCOVERY_DATE_FLOOR = "2010-01-01"
DISCOVERY_MIN_VOTES = {"movie": 500, "tv": 300}

FALLBACK_PAGES = 5
FALLBACK_RESULT_SIZE = 30
FALLBACK_DATE_FLOOR = "2000-01-01"
FALLBACK_MIN_VOTES = {"movie": 1000, "tv": 500}

# =============================================================================
# Rating
# =============================================================================
RATING_MIN = 0
RATING_MAX = 10

# =============================================================================
# Streaming platforms
# =============================================================================
STREAMING_PLATFORM_LABELS = {
    "netflix": "Netflix",
    "prime_video": "Prime Video",
    "disney_plus": "Disney+",
    "hbo_max": "HBO Max",
    "apple_tv": "Apple TV+",
    "paramount_plus": "Paramount+",
    "hulu": "Hulu",
    "peacock": "Peacock",
    "crunchyroll": "Crunchyroll",
    "filmin": "Filmin",
    "movistar_plus": "Movistar+",
}
STREAMING_PLATFORM_LIST = list(STREAMING_PLATFORM_LABELS)

# Known streaming provider IDs (TMDB watch providers)
STREAMING_PROVIDER_IDS = {
    "netflix": 8,
    "prime_video": 119,
    "disney_plus": 337,
    "hbo_max": 1899,
    "apple_tv": 350,
    "paramount_plus": 531,
    "hulu": 15,
    "peacock": 386,
    "crunchyroll": 283,
    "filmin": 63,
    "movistar_plus": 149,
}

# =============================================================================
# Database tables
# =============================================================================
TABLE_INTERACTIONS = "UserMediaInteractions"
TABLE_PROFILES = "UserProfiles"

# PostgREST error codes
PGRST_UNIQUE_VIOLATION = "23505"
PGRST_FOREIGN_KEY_VIOLATION = "23503"
PGRST_INSUFFICIENT_PRIVILEGE = "42501"
