# =============================================================================
# tests/test_app.py - Application Tests
# =============================================================================
# End-to-end tests through the FastAPI app: protected routes, error envelope,
# CORS policy, docs and the thin resource routers.
# =============================================================================

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.exceptions import ExpiredTokenError
from app.main import create_app
from app.middleware.protected_routes import protect_routes, route_path
from tests.conftest import TEST_USER_ID


def build_client(test_settings, protected_routes=None, verifier=None) -> TestClient:
    app = create_app(settings=test_settings, protected_routes=protected_routes, verifier=verifier)
    return TestClient(app)


# =============================================================================
# Protected Routes
# =============================================================================

class TestProtectedRoutes:
    """Gate behavior with the JWT verifier."""

    def test_exact_path_with_query_requires_token(self, test_settings):
        client = build_client(test_settings, {"/api/users/profile": True})

        response = client.get("/api/users/profile?x=1")

        assert response.status_code == 401
        assert response.json() == {
            "error": {"message": "unauthenticated", "code": "UNAUTHENTICATED", "data": None}
        }

    def test_exact_path_with_token(self, test_settings, auth_headers):
        client = build_client(test_settings, {"/api/users/profile": True})

        response = client.get("/api/users/profile?x=1", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"id": TEST_USER_ID, "email": "reader@example.com"}

    def test_pattern_requires_token(self, test_settings):
        client = build_client(test_settings, {"/api/articles/update/:id": True})

        response = client.post("/api/articles/update/42", json={"title": "x"})

        assert response.status_code == 401

    def test_pattern_with_token(self, test_settings, auth_headers):
        client = build_client(test_settings, {"/api/articles/update/:id": True})

        response = client.post(
            "/api/articles/update/42", json={"title": "New title"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == {
            "action": "update",
            "article_id": "42",
            "user_id": TEST_USER_ID,
            "article": {"title": "New title"},
        }

    def test_extra_segment_not_verified(self, test_settings):
        verifier = AsyncMock()
        client = build_client(test_settings, {"/api/articles/update/:id": True}, verifier)

        response = client.post("/api/articles/update/42/extra")

        assert response.status_code == 404
        verifier.assert_not_awaited()

    def test_disabled_pattern_not_verified(self, test_settings):
        verifier = AsyncMock()
        client = build_client(test_settings, {"/api/articles/update/:id": False}, verifier)

        response = client.post("/api/articles/update/42", json={})

        verifier.assert_not_awaited()
        # The handler itself still needs an identity
        assert response.status_code == 401

    def test_expired_token(self, test_settings, make_token):
        client = build_client(test_settings, {"/api/users/profile": True})
        token = make_token(expires_delta=timedelta(minutes=-1))

        response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "expired token"
        assert response.json()["error"]["code"] == "EXPIRED_TOKEN"

    def test_unregistered_root_not_verified(self, test_settings):
        verifier = AsyncMock()
        client = build_client(test_settings, {"/api/users/profile": True}, verifier)

        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "SERVER"
        verifier.assert_not_awaited()

    def test_runs_for_every_method(self, test_settings):
        verifier = AsyncMock(side_effect=ExpiredTokenError())
        client = build_client(test_settings, {"/api/articles/delete/:id": True}, verifier)

        response = client.delete("/api/articles/delete/5")

        assert response.status_code == 401
        verifier.assert_awaited_once()

    def test_invalid_pattern_fails_at_startup(self, test_settings):
        from core.routing import RoutePatternError

        with pytest.raises(RoutePatternError):
            create_app(settings=test_settings, protected_routes={"/api/(": True})


# =============================================================================
# Handler Isolation
# =============================================================================

class TestHandlerIsolation:
    """The handler runs only when the gate allows the request."""

    @pytest.fixture
    def spy_app(self, test_settings):
        def _make(verifier):
            app = create_app(
                settings=test_settings,
                protected_routes={"/api/spy/:id": True},
                verifier=verifier,
            )
            calls = []

            @app.get("/api/spy/{item_id}")
            async def spy(item_id: str):
                calls.append(item_id)
                return {"item_id": item_id}

            return TestClient(app), calls

        return _make

    def test_denied_handler_never_runs(self, spy_app):
        client, calls = spy_app(AsyncMock(side_effect=ExpiredTokenError()))

        response = client.get("/api/spy/1")

        assert response.status_code == 401
        assert calls == []

    def test_allowed_handler_runs_once(self, spy_app):
        verifier = AsyncMock()
        client, calls = spy_app(verifier)

        response = client.get("/api/spy/1")

        assert response.status_code == 200
        assert calls == ["1"]
        verifier.assert_awaited_once()

    def test_unexpected_verifier_fault_is_500(self, spy_app):
        client, calls = spy_app(AsyncMock(side_effect=RuntimeError("key store offline")))

        response = client.get("/api/spy/1")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"message": "key store offline", "code": "INTERNAL_ERROR", "data": None}
        }
        assert calls == []

    @pytest.mark.parametrize("host", ["example.com?", "example.com#", "example.com/x"])
    def test_host_header_does_not_change_checked_path(self, spy_app, host):
        """The gate checks the routed path, not a URL rebuilt from Host."""
        verifier = AsyncMock(side_effect=ExpiredTokenError())
        client, calls = spy_app(verifier)

        response = client.get("/api/spy/1", headers={"Host": host})

        assert response.status_code == 401
        assert calls == []
        verifier.assert_awaited_once()


# =============================================================================
# Route Path
# =============================================================================

class TestRoutePath:
    """Tests for the path handed to the gate."""

    def test_plain_path(self):
        assert route_path({"path": "/api/users/profile"}) == "/api/users/profile"

    def test_root_path_prefix_removed(self):
        scope = {"path": "/prefix/api/users/profile", "root_path": "/prefix"}
        assert route_path(scope) == "/api/users/profile"

    def test_path_without_root_prefix_unchanged(self):
        scope = {"path": "/api/users/profile", "root_path": "/prefix"}
        assert route_path(scope) == "/api/users/profile"

    def test_similar_prefix_not_stripped(self):
        scope = {"path": "/prefixed/api", "root_path": "/prefix"}
        assert route_path(scope) == "/prefixed/api"

    def test_default_verifier_uses_given_settings(self, test_settings, auth_headers):
        app = FastAPI()
        protect_routes(app, {"/secret": True}, settings=test_settings)

        @app.get("/secret")
        async def secret():
            return {"ok": True}

        client = TestClient(app)

        assert client.get("/secret").status_code == 401
        assert client.get("/secret", headers=auth_headers).json() == {"ok": True}


# =============================================================================
# Routers and Error Envelope
# =============================================================================

class TestRouters:
    """Default app wiring."""

    def test_default_table_protects_writes(self, client):
        response = client.post("/api/articles/create", json={"title": "x"})
        assert response.status_code == 401

    def test_create_with_token(self, client, auth_headers):
        response = client.post(
            "/api/articles/create", json={"title": "x", "tags": ["a"]}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["article"] == {"title": "x", "body": None, "tags": ["a"]}
        assert response.json()["user_id"] == TEST_USER_ID

    def test_public_article_read(self, client):
        response = client.get("/api/articles/7")

        assert response.status_code == 200
        assert response.json()["article_id"] == "7"
        assert response.json()["user_id"] is None

    def test_auth_verify(self, client, auth_headers):
        response = client.get("/api/auth/verify", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "user_id": TEST_USER_ID,
            "email": "reader@example.com",
        }

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["protected_routes"] == 5

    def test_not_found_envelope(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HTTP_404"

    def test_validation_envelope(self, client, auth_headers):
        response = client.post(
            "/api/articles/update/1", json={"tags": "not-a-list"}, headers=auth_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert response.json()["error"]["data"][0]["field"] == "body.tags"

    def test_docs_are_public(self, client):
        assert client.get("/openapi.json").status_code == 200
        assert client.get("/docs").status_code == 200


# =============================================================================
# CORS
# =============================================================================

class TestCors:
    """CORS origin policy."""

    def test_origin_reflected(self, client):
        response = client.get("/", headers={"Origin": "https://example.com"})
        assert response.headers["access-control-allow-origin"] == "https://example.com"

    def test_blocked_origin_gets_no_headers(self, client):
        response = client.get("/", headers={"Origin": "localhost"})
        assert "access-control-allow-origin" not in response.headers

    def test_preflight_skips_gate(self, test_settings):
        verifier = AsyncMock()
        client = build_client(test_settings, {"/api/users/profile": True}, verifier)

        response = client.options(
            "/api/users/profile",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        verifier.assert_not_awaited()

    def test_denial_carries_cors_headers(self, client):
        response = client.get("/api/users/profile", headers={"Origin": "https://example.com"})

        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] == "https://example.com"
