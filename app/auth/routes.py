# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Token issuance happens elsewhere; these routes only report on the
# credential the request was verified with.
# =============================================================================

from fastapi import APIRouter

from app.auth.dependencies import CurrentUser

router = APIRouter()


@router.get("/verify")
async def verify_token(user: CurrentUser) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is missing, invalid or expired
    """
    return {
        "valid": True,
        "user_id": user.id,
        "email": user.email,
    }
