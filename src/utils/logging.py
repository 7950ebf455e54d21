"""Logging setup for the SofayManta backend."""

import logging
import sys

from src.config import get_settings


def setup_logging() -> None:
    """Configure the root logger: DEBUG in development, INFO otherwise."""
    level = logging.DEBUG if get_settings().is_development else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # TMDB and Supabase requests go through httpx
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Prefixes log messages with request context, e.g. ``[user_id=..] [media_type=..]``."""

    def __init__(self, logger: logging.Logger, **context: object) -> None:
        self.logger = logger
        self.prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def debug(self, msg: str) -> None:
        self.logger.debug(f"{self.prefix} {msg}")

    def info(self, msg: str) -> None:
        self.logger.info(f"{self.prefix} {msg}")

    def error(self, msg: str) -> None:
        self.logger.error(f"{self.prefix} {msg}")
