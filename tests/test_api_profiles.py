"""Tests for /user-profiles endpoints."""

import pytest
from httpx import AsyncClient

from src.constants import TABLE_PROFILES
from tests.conftest import ADMIN_ID, OTHER_USER_ID, USER_ID, FakeSupabase, make_profile

BASE = "/user-profiles"


class TestProfiles:

    @pytest.mark.asyncio
    async def test_get_profile(self, client: AsyncClient):
        response = await client.get(f"{BASE}/{USER_ID}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == USER_ID
        assert data["role"] == "user"

    @pytest.mark.asyncio
    async def test_null_preferences_read_as_empty(self, client: AsyncClient, fake_db: FakeSupabase):
        fake_db.tables[TABLE_PROFILES] = [
            make_profile(favorite_movie_genres=None, favorite_tv_genres=None, streaming_platforms=None)
        ]

        profile = await client.get(f"{BASE}/{USER_ID}")
        platforms = await client.get(f"{BASE}/{USER_ID}/streaming-platforms")
        added = await client.post(
            f"{BASE}/{USER_ID}/favorite-genres", json={"genre_id": 28, "media_type": "movie"}
        )

        assert profile.status_code == 200
        assert profile.json()["favorite_movie_genres"] == []
        assert platforms.json() == []
        assert added.json() == {"movie_genres": [28], "tv_genres": []}

    @pytest.mark.asyncio
    async def test_unknown_profile_is_404(self, client: AsyncClient):
        response = await client.get(f"{BASE}/{OTHER_USER_ID}")

        assert response.status_code == 404
        assert response.json()["detail"] == f"User profile with ID {OTHER_USER_ID} not found"

    @pytest.mark.asyncio
    async def test_list_users_skips_admins(self, client: AsyncClient, fake_db: FakeSupabase):
        fake_db.tables[TABLE_PROFILES] += [
            make_profile(OTHER_USER_ID, created_at="2024-06-01T00:00:00+00:00"),
            make_profile(ADMIN_ID, role="admin"),
        ]

        response = await client.get(BASE)

        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [OTHER_USER_ID, USER_ID]


class TestFavoriteGenres:

    @pytest.mark.asyncio
    async def test_add_and_list(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/{USER_ID}/favorite-genres", json={"genre_id": 28, "media_type": "movie"}
        )
        assert response.status_code == 200
        assert response.json() == {"movie_genres": [28], "tv_genres": []}

        response = await client.get(f"{BASE}/{USER_ID}/favorite-genres")
        assert response.json()["movie_genres"] == [28]

    @pytest.mark.asyncio
    async def test_add_is_idempotent(self, client: AsyncClient, fake_db: FakeSupabase):
        fake_db.tables[TABLE_PROFILES][0]["favorite_tv_genres"] = [18]

        response = await client.post(
            f"{BASE}/{USER_ID}/favorite-genres", json={"genre_id": 18, "media_type": "tv"}
        )

        assert response.json()["tv_genres"] == [18]

    @pytest.mark.asyncio
    async def test_remove(self, client: AsyncClient, fake_db: FakeSupabase):
        fake_db.tables[TABLE_PROFILES][0]["favorite_movie_genres"] = [28, 35]

        response = await client.delete(f"{BASE}/{USER_ID}/favorite-genres/movie/28")

        assert response.status_code == 200
        assert response.json()["movie_genres"] == [35]

    @pytest.mark.asyncio
    async def test_invalid_body(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/{USER_ID}/favorite-genres", json={"genre_id": 0, "media_type": "book"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_remove_rejects_unknown_media_type(self, client: AsyncClient):
        response = await client.delete(f"{BASE}/{USER_ID}/favorite-genres/book/28")

        assert response.status_code == 422


class TestStreamingPlatforms:

    @pytest.mark.asyncio
    async def test_add_platform(self, client: AsyncClient):
        response = await client.post(f"{BASE}/{USER_ID}/streaming-platforms", json={"platform": "netflix"})

        assert response.status_code == 200
        assert response.json() == ["netflix"]

    @pytest.mark.asyncio
    async def test_unknown_platform_is_400(self, client: AsyncClient):
        response = await client.post(f"{BASE}/{USER_ID}/streaming-platforms", json={"platform": "betamax"})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_remove_platform(self, client: AsyncClient, fake_db: FakeSupabase):
        fake_db.tables[TABLE_PROFILES][0]["streaming_platforms"] = ["netflix", "filmin"]

        response = await client.delete(f"{BASE}/{USER_ID}/streaming-platforms/netflix")

        assert response.json() == ["filmin"]

        response = await client.get(f"{BASE}/{USER_ID}/streaming-platforms")
        assert response.json() == ["filmin"]


class TestAccountDeletion:

    @pytest.mark.asyncio
    async def test_delete_account(self, client: AsyncClient, fake_db: FakeSupabase):
        response = await client.delete(f"{BASE}/{USER_ID}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "error": None}
        profile = fake_db.tables[TABLE_PROFILES][0]
        assert profile["role"] == "deleted"
        assert profile["email"] == ""
        assert profile["username"].startswith("deleted_user_")
        assert fake_db.auth.admin.deleted == [USER_ID]

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_account(self, client: AsyncClient, fake_db: FakeSupabase):
        fake_db.tables[TABLE_PROFILES][0]["role"] = "admin"

        response = await client.delete(f"{BASE}/{USER_ID}")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert "user" in data["error"]
        assert fake_db.auth.admin.deleted == []
