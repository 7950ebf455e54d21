"""Shared persistent httpx client for TMDB calls.

One pooled client per process: every catalog lookup reuses the same
connections instead of paying a TCP + TLS handshake per request.
"""

import httpx

from src.constants import HTTPX_TIMEOUT

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)

_tmdb_client: httpx.AsyncClient | None = None


def get_tmdb_client() -> httpx.AsyncClient:
    """Get persistent httpx client for TMDB API calls."""
    global _tmdb_client
    if _tmdb_client is None:
        _tmdb_client = httpx.AsyncClient(
            timeout=HTTPX_TIMEOUT,
            limits=_POOL_LIMITS,
        )
    return _tmdb_client


async def close_all_clients() -> None:
    """Close persistent httpx clients. Call during app shutdown."""
    global _tmdb_client
    if _tmdb_client is not None:
        await _tmdb_client.aclose()
        _tmdb_client = None
