# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.auth import routes as auth_routes
from app.config import Settings, settings as default_settings
from app.exceptions import register_exception_handlers
from app.middleware import protect_routes
from app.routers import articles, health, users
from core.gate import Verifier
from core.registry import ProtectedRouteRegistry

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


OPENAPI_TAGS = [
    {
        "name": "Auth",
        "description": "Inspect the credential a request was verified with",
    },
    {
        "name": "Users",
        "description": "Authenticated user profile",
    },
    {
        "name": "Articles",
        "description": "Article routes; write routes require a bearer token",
    },
    {
        "name": "Health",
        "description": "API health checks",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup.
    """
    settings: Settings = app.state.settings
    registry: ProtectedRouteRegistry = app.state.protected_routes

    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Protected routes: {list(registry.enabled_patterns)}")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}")


def create_app(
    settings: Settings | None = None,
    protected_routes: ProtectedRouteRegistry | Mapping[str, bool] | None = None,
    verifier: Verifier | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings to use (global settings by default)
        protected_routes: {pattern: enabled} table; settings.PROTECTED_ROUTES by default
        verifier: Credential verifier; a JWTVerifier from settings by default

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    if protected_routes is None:
        protected_routes = settings.PROTECTED_ROUTES

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
## Gated API

Resource routes behind a bearer-token gate.

Requests to paths listed in the protected-route table (for example
`/api/articles/update/:id`) must send `Authorization: Bearer <token>`.
Every other path is public.

Errors always use the same body:

```json
{"error": {"message": "expired token", "code": "EXPIRED_TOKEN", "data": null}}
```
""",
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings

    # =========================================================================
    # Middleware
    # =========================================================================
    # Starlette runs the last added middleware first: CORS wraps the gate, so
    # preflight requests never reach it and denials still get CORS headers.

    app.state.protected_routes = protect_routes(app, protected_routes, verifier, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[] if settings.cors_origin_regex else settings.cors_origins_list,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "SERVER"

    app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(articles.router, prefix="/api/articles", tags=["Articles"])
    app.include_router(health.router, prefix="/api", tags=["Health"])

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on API_HOST:API_PORT."""
    uvicorn.run(
        "app.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.DEBUG,
    )


if __name__ == "__main__":
    run()
