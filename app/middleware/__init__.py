# =============================================================================
# app/middleware/ - Request Interception
# =============================================================================
# - protected_routes.py: authorization gate for the protected-route registry
# =============================================================================

from app.middleware.protected_routes import ProtectedRoutesMiddleware, protect_routes

__all__ = [
    "ProtectedRoutesMiddleware",
    "protect_routes",
]
