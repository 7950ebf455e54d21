"""Database module."""

from src.db.database import (
    create_clients,
    get_admin_db,
    get_db,
    run_query,
)

__all__ = [
    "create_clients",
    "get_admin_db",
    "get_db",
    "run_query",
]
