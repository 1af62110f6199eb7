# =============================================================================
# app/auth/tokens.py - Local Token Minting
# =============================================================================
# Creates tokens the JWTVerifier accepts. Used by tests and for local
# development; the API itself exposes no login or token endpoints.
# =============================================================================

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from app.config import Settings, settings as default_settings


def create_access_token(
    subject: str | Any,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
    **claims: Any,
) -> str:
    """
    Sign a bearer token for `subject`.

    Args:
        subject: Value of the "sub" claim (stringified)
        expires_delta: Token lifetime; ACCESS_TOKEN_EXPIRE_MINUTES when None.
            A negative delta produces an already expired token.
        settings: Settings providing key and algorithm (global settings by default)
        **claims: Extra claims, e.g. email="a@b.c"

    Returns:
        Encoded JWT string
    """
    settings = settings or default_settings
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    to_encode = {"sub": str(subject), "iat": now, "exp": now + expires_delta, **claims}
    if settings.JWT_AUDIENCE and "aud" not in claims:
        to_encode["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
