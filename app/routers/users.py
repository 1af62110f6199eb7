# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# Profile of the authenticated caller. The identity comes from the token;
# there is no user store behind it.
# =============================================================================

from fastapi import APIRouter

from app.auth import AuthUser, CurrentUser

router = APIRouter()


@router.get("/profile", response_model=AuthUser)
async def get_profile(user: CurrentUser) -> AuthUser:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    return user
