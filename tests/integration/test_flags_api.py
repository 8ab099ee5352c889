"""
Integration tests for the Flags API.
"""
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from toggles.api.dependencies import get_flag_store
from toggles.config import get_settings
from toggles.main import app
from toggles.models.schemas import Flag


class TestFlagLookup:
    def test_list_flags(self, test_client: TestClient, sample_flags):
        response = test_client.get("/v1/flags")

        assert response.status_code == 200
        data = response.json()
        assert [f["name"] for f in data] == [f.name for f in sample_flags]
        assert data[0]["id"] == 1

    def test_get_flag(self, test_client: TestClient):
        response = test_client.get("/v1/flags/admin-only")

        assert response.status_code == 200
        assert response.json()["roles"] == ["admin"]

    def test_get_flag_not_found(self, test_client: TestClient):
        response = test_client.get("/v1/flags/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_flags_are_read_only(self, test_client: TestClient):
        assert test_client.post("/v1/flags", json={"name": "new"}).status_code == 405
        assert test_client.delete("/v1/flags/beta").status_code == 405
        assert test_client.get("/v1/flags/beta").status_code == 200


class TestIsActive:
    def test_role_match(self, test_client: TestClient):
        response = test_client.get(
            "/v1/flags/admin-only/active",
            params={"user": "u2", "roles": ["user", "admin"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "name": "admin-only",
            "is_active": True,
            "user": "u2",
            "roles": ["user", "admin"],
            "groups": None,
        }

    def test_group_mismatch(self, test_client: TestClient):
        response = test_client.get(
            "/v1/flags/beta/active",
            params={"groups": "alpha"},
        )
        assert response.json()["is_active"] is False

    def test_unknown_flag_inactive(self, test_client: TestClient):
        response = test_client.get("/v1/flags/missing/active", params={"user": "u1"})

        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_result_is_cached(self, test_client: TestClient):
        params = {"user": "alice"}
        assert test_client.get("/v1/flags/vip-users/active", params=params).json()["is_active"]

        get_flag_store().replace(Flag(name="vip-users", everyone=False))

        # Served from cache until invalidated
        assert test_client.get("/v1/flags/vip-users/active", params=params).json()["is_active"]
        assert test_client.get("/v1/cache").json()["size"] == 1

        test_client.delete("/v1/cache")
        assert not test_client.get("/v1/flags/vip-users/active", params=params).json()["is_active"]

    def test_cache_disabled(self, test_client: TestClient):
        settings = get_settings()
        original_value = settings.EVALUATION_CACHE_ENABLED
        settings.EVALUATION_CACHE_ENABLED = False

        try:
            test_client.get("/v1/flags/vip-users/active", params={"user": "alice"})
            assert test_client.get("/v1/cache").json()["size"] == 0
        finally:
            settings.EVALUATION_CACHE_ENABLED = original_value

    def test_store_failure_returns_500(self, test_client: TestClient):
        store = get_flag_store()
        store.get_by_name = AsyncMock(side_effect=ConnectionError("db down"))

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/v1/flags/beta/active", params={"user": "u1"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestBatchEvaluate:
    def test_named_flags(self, test_client: TestClient):
        response = test_client.post(
            "/v1/flags/evaluate",
            json={"names": ["beta", "admin-only", "missing"], "groups": ["beta"]},
        )

        assert response.status_code == 200
        assert response.json()["results"] == {
            "beta": True,
            "admin-only": False,
            "missing": False,
        }

    def test_all_flags(self, test_client: TestClient, sample_flags):
        response = test_client.post("/v1/flags/evaluate", json={"user": "bob"})

        results = response.json()["results"]
        assert set(results) == {f.name for f in sample_flags}
        assert results["vip-users"] is True
        assert results["everyone-off"] is False
        # No expiration policy configured: expired flag still evaluates its rules
        assert results["expired-on"] is True

    def test_batch_not_cached(self, test_client: TestClient):
        test_client.post("/v1/flags/evaluate", json={"user": "bob"})
        assert test_client.get("/v1/cache").json()["size"] == 0


class TestUnpairedSurrogateUser:
    def test_batch_evaluate_with_surrogate_user(self, test_client: TestClient):
        response = test_client.post(
            "/v1/flags/evaluate",
            content='{"names": ["half"], "user": "\\ud800"}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 200
        # bucket 3055733070 % 100 == 70, outside a 50% rollout
        assert response.json()["results"] == {"half": False}


class TestHashUser:
    def test_hash_user(self, test_client: TestClient):
        response = test_client.get("/v1/users/foo/hash")

        assert response.status_code == 200
        assert response.json() == {"user_id": "foo", "hash": 4138058784, "bucket": 84}
