# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - exceptions.py: Error types and the JSON error envelope
# - auth/: Bearer token verification and identity dependencies
# - middleware/: Protected-routes gate
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# authorization decisions to the core/ package.
# =============================================================================
