"""Supabase connection and client dependencies."""

from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
import pydantic
from fastapi import Request
from postgrest.exceptions import APIError as PostgrestAPIError
from supabase import AsyncClient, acreate_client

from src.config import get_settings
from src.constants import (
    PGRST_FOREIGN_KEY_VIOLATION,
    PGRST_INSUFFICIENT_PRIVILEGE,
    PGRST_UNIQUE_VIOLATION,
)
from src.errors import ConflictError, DomainError, ForbiddenError, UpstreamError


async def create_clients() -> tuple[AsyncClient, AsyncClient]:
    """Create the standard (anon key) and admin (service key) clients."""
    settings = get_settings()
    client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
    admin_client = await acreate_client(settings.supabase_url, settings.supabase_service_key)
    return client, admin_client


def _get_state_client(request: Request, name: str) -> AsyncClient:
    client = getattr(request.app.state, name, None)
    if client is None:
        raise UpstreamError("Supabase client not initialized")
    return client


def get_db(request: Request) -> AsyncClient:
    """Dependency for the standard Supabase client."""
    return _get_state_client(request, "supabase")


def get_admin_db(request: Request) -> AsyncClient:
    """Dependency for the service-role client (admin operations only)."""
    return _get_state_client(request, "supabase_admin")


def map_postgrest_error(e: PostgrestAPIError) -> DomainError:
    """Translate a PostgREST error code into a domain error."""
    code = getattr(e, "code", None) or ""
    # 23505 unique_violation, 42501 insufficient_privilege (RLS), 23503 foreign_key_violation
    if code == PGRST_UNIQUE_VIOLATION:
        return ConflictError("duplicate")
    if code == PGRST_INSUFFICIENT_PRIVILEGE:
        return ForbiddenError("permission denied")
    if code == PGRST_FOREIGN_KEY_VIOLATION:
        return ConflictError("foreign key violation")
    return UpstreamError(getattr(e, "message", None) or str(e))


async def run_query(query: Awaitable[Any]) -> Any:
    """Await a query's ``execute()`` and normalize store failures.

    Usage:
        res = await run_query(db.table("UserProfiles").select("*").execute())
    """
    try:
        return await query
    except PostgrestAPIError as e:
        raise map_postgrest_error(e) from e
    except httpx.HTTPError as e:
        raise UpstreamError(f"Supabase request failed: {e}") from e


ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def validate_rows(model: type[ModelT], rows: list[dict] | None, entity: str) -> list[ModelT]:
    """Parse store rows into ``model``; a row that does not fit is an upstream failure."""
    try:
        return [model.model_validate(row) for row in rows or []]
    except pydantic.ValidationError as e:
        raise UpstreamError(f"Malformed {entity} row in store: {e.error_count()} invalid field(s)") from e
