"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Settings are read at import time; set them before importing the app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("TMDB_ACCESS_TOKEN", "test-tmdb-key")
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")

from src.constants import TABLE_INTERACTIONS, TABLE_PROFILES  # noqa: E402
from src.db.database import get_admin_db, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.schemas import CatalogItem, DiscoverPage, GenreRef, MediaType  # noqa: E402
from src.services.metadata import get_tmdb_service  # noqa: E402

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"
ADMIN_ID = "33333333-3333-3333-3333-333333333333"


class FakeQuery:
    """In-memory stand-in for the postgrest query builder.

    Supports the subset of the builder used by the store modules: select,
    update, eq, is_, not_, gte, in_, order, limit and an awaitable execute.
    """

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._filters: list = []
        self._orders: list[tuple[str, bool]] = []
        self._limit: int | None = None
        self._update: dict[str, Any] | None = None
        self._count: str | None = None
        self._head = False
        self._negate = False

    def select(self, _cols: str = "*", count: str | None = None, head: bool = False) -> "FakeQuery":
        self._count = count
        self._head = head
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._update = payload
        return self

    @property
    def not_(self) -> "FakeQuery":
        self._negate = True
        return self

    def _add(self, predicate) -> "FakeQuery":
        if self._negate:
            self._negate = False
            self._filters.append(lambda row: not predicate(row))
        else:
            self._filters.append(predicate)
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) == value)

    def is_(self, column: str, value: Any) -> "FakeQuery":
        assert value is None
        return self._add(lambda row: row.get(column) is None)

    def gte(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) is not None and row[column] >= value)

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        return self._add(lambda row: row.get(column) in values)

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._orders.append((column, desc))
        return self

    def limit(self, n: int) -> "FakeQuery":
        self._limit = n
        return self

    async def execute(self) -> SimpleNamespace:
        self._db.calls.append(self._table)
        if self._table in self._db.failures:
            raise self._db.failures[self._table]

        rows = self._db.tables.setdefault(self._table, [])
        matched = [row for row in rows if all(f(row) for f in self._filters)]

        if self._update is not None:
            for row in matched:
                row.update(self._update)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)

        for column, desc in reversed(self._orders):
            matched.sort(key=lambda row: (row.get(column) is None, row.get(column)), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]

        count = len(matched) if self._count else None
        data = [] if self._head else [dict(row) for row in matched]
        return SimpleNamespace(data=data, count=count)


class FakeAdminAuth:
    def __init__(self) -> None:
        self.deleted: list[str] = []
        self.error: Exception | None = None

    async def delete_user(self, user_id: str) -> None:
        if self.error is not None:
            raise self.error
        self.deleted.append(user_id)


class FakeSupabase:
    """Minimal async Supabase client backed by dicts."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables = tables or {}
        self.failures: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.auth = SimpleNamespace(admin=FakeAdminAuth())

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def make_profile(user_id: str = USER_ID, **overrides: Any) -> dict[str, Any]:
    profile = {
        "id": user_id,
        "email": f"{user_id[:4]}@example.com",
        "username": f"user_{user_id[:4]}",
        "role": "user",
        "favorite_movie_genres": [],
        "favorite_tv_genres": [],
        "streaming_platforms": [],
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    profile.update(overrides)
    return profile


def make_interaction(
    media_id: int,
    rating: int | None = None,
    *,
    user_id: str = USER_ID,
    media_type: str = "movie",
    **overrides: Any,
) -> dict[str, Any]:
    row = {
        "id": f"00000000-0000-0000-0000-{media_id:012d}",
        "user_id": user_id,
        "media_id": media_id,
        "media_type": media_type,
        "rating": rating,
        "comment": None,
        "season_number": None,
        "episode_number": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_page(ids: list[int], page: int = 1, total_pages: int = 1) -> DiscoverPage:
    return DiscoverPage(
        items=[CatalogItem(id=i, title=f"Title {i}") for i in ids],
        page=page,
        total_pages=total_pages,
        total_results=len(ids) * total_pages,
    )


class FakeCatalog:
    """TMDBService stand-in recording every call.

    ``genres`` maps a media id to its genre ids, or to an exception to raise.
    ``pages`` maps a page number to the DiscoverPage returned by discover.
    """

    def __init__(
        self,
        genres: dict[int, list[int] | Exception] | None = None,
        pages: dict[int, DiscoverPage] | None = None,
    ):
        self.genres = genres or {}
        self.pages = pages or {}
        self.discover_calls: list[dict[str, Any]] = []
        self.genre_calls: list[int] = []

    async def get_genres(self, media_id: int, media_type: MediaType, language: str) -> list[GenreRef]:
        self.genre_calls.append(media_id)
        found = self.genres.get(media_id, [])
        if isinstance(found, Exception):
            raise found
        return [GenreRef(id=g) for g in found]

    async def discover(self, media_type: MediaType, **kwargs: Any) -> DiscoverPage:
        self.discover_calls.append({"media_type": media_type, **kwargs})
        page = kwargs.get("page", 1)
        return self.pages.get(page, make_page([], page=page, total_pages=max(self.pages, default=1)))


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase({TABLE_PROFILES: [make_profile()], TABLE_INTERACTIONS: []})


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest_asyncio.fixture
async def client(fake_db: FakeSupabase, fake_catalog: FakeCatalog) -> AsyncGenerator[AsyncClient, None]:
    """Test client wired to the in-memory store and catalog."""
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_admin_db] = lambda: fake_db
    app.dependency_overrides[get_tmdb_service] = lambda: fake_catalog

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
