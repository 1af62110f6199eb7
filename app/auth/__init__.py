# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer JWT verification for protected routes.
#
# Usage:
#   from app.auth import JWTVerifier, get_current_user, AuthUser
# =============================================================================

from app.auth.dependencies import CurrentUser, get_current_user, get_current_user_optional
from app.auth.models import AuthUser, TokenPayload
from app.auth.tokens import create_access_token
from app.auth.verifier import JWTVerifier

__all__ = [
    "AuthUser",
    "CurrentUser",
    "JWTVerifier",
    "TokenPayload",
    "create_access_token",
    "get_current_user",
    "get_current_user_optional",
]
