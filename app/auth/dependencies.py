# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Handlers read the identity recorded by the protected-routes middleware.
# They never verify tokens themselves: a route is authenticated only when
# its path is in the protected-route registry.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/profile")
#   async def profile(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from typing import Annotated, Optional

from fastapi import Depends, Request

from app.auth.models import AuthUser
from app.exceptions import UnauthenticatedError


async def get_current_user_optional(request: Request) -> Optional[AuthUser]:
    """
    Return the verified identity, or None for requests the gate let through
    unauthenticated.
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        return None

    payload = getattr(request.state, "token_payload", None)
    email = getattr(payload, "email", None)
    return AuthUser(id=user_id, email=email)


async def get_current_user(
    user: Optional[AuthUser] = Depends(get_current_user_optional)
) -> AuthUser:
    """
    Return the verified identity.

    Raises:
        UnauthenticatedError: 401 if the route is not protected, so no
            identity was recorded for this request
    """
    if user is None:
        raise UnauthenticatedError()
    return user


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
