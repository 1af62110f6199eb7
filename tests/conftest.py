# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Provides settings, token and client fixtures
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-pytest")

from datetime import timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.auth.tokens import create_access_token
from app.config import Settings
from app.main import create_app


TEST_SECRET = "test-secret-key-for-pytest"
TEST_USER_ID = "550e8400-e29b-41d4-a716-446655440000"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings with a known signing key and open CORS."""
    return Settings(
        JWT_SECRET_KEY=TEST_SECRET,
        CORS_ORIGINS="*",
        CORS_BLOCKED_ORIGINS="localhost",
    )


@pytest.fixture
def make_token(test_settings):
    """Factory for signed tokens; pass a negative expires_delta for expired ones."""

    def _make(subject: str = TEST_USER_ID, expires_delta: timedelta | None = None, **claims):
        return create_access_token(
            subject,
            expires_delta=expires_delta,
            settings=test_settings,
            **claims,
        )

    return _make


@pytest.fixture
def auth_headers(make_token):
    """Authorization header with a valid token for TEST_USER_ID."""
    return {"Authorization": f"Bearer {make_token(email='reader@example.com')}"}


@pytest.fixture
def app(test_settings):
    """App with the default protected-route table."""
    return create_app(settings=test_settings)


@pytest.fixture
def client(app):
    """Test client for the default app."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_request():
    """Factory for minimal request objects accepted by the gate."""

    def _make(path: str):
        return SimpleNamespace(scope={"path": path}, state=SimpleNamespace())

    return _make
