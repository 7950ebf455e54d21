"""Utility modules for the SofayManta backend."""

from src.utils.http_client import close_all_clients, get_tmdb_client
from src.utils.logging import get_logger, LogContext, setup_logging

__all__ = [
    # HTTP
    "close_all_clients",
    "get_tmdb_client",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
]
