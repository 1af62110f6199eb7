# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated identity recorded on the request by the verifier.

    This is the minimal user info available from the token itself,
    without querying any user store.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None


class TokenPayload(BaseModel):
    """
    Decoded JWT token payload.

    Only `sub` is required; unknown claims are kept.
    """
    model_config = ConfigDict(extra="allow")

    sub: str  # User ID
    email: Optional[str] = None
    aud: Optional[str | list[str]] = None
    exp: Optional[int] = None  # Expiration timestamp
    iat: Optional[int] = None  # Issued at timestamp
