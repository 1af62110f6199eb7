# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoint
# - users.py: Authenticated user profile
# - articles.py: Article routes (writes protected by the registry)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import articles
from . import health
from . import users

__all__ = [
    "articles",
    "health",
    "users",
]
