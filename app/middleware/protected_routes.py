# =============================================================================
# app/middleware/protected_routes.py - Protected Routes Middleware
# =============================================================================
# Runs the authorization gate on every HTTP request, before routing.
#
# - Unprotected path: the request continues untouched.
# - Protected path, valid credential: identity is recorded on request.state
#   and the request continues to its handler.
# - Protected path, verifier raised: the error goes straight to the error
#   responder and the handler never runs.
#
# Usage:
#   protect_routes(app, {"/api/articles/update/:id": True})
# =============================================================================

from collections.abc import Mapping

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Scope

from app.config import Settings, settings as default_settings
from app.exceptions import error_response
from core.gate import AuthorizationGate, Verifier
from core.registry import ProtectedRouteRegistry


def route_path(scope: Scope) -> str:
    """
    Path the router dispatches on: the raw ASGI path without any root_path.

    Never derived from request.url, which is rebuilt from the Host header.
    """
    path = scope["path"]
    root_path = scope.get("root_path", "")
    if root_path and path.startswith(root_path + "/"):
        return path[len(root_path):]
    return path


class ProtectedRoutesMiddleware(BaseHTTPMiddleware):
    """Starlette middleware wrapping an AuthorizationGate."""

    def __init__(
        self,
        app: ASGIApp,
        registry: ProtectedRouteRegistry | Mapping[str, bool],
        verifier: Verifier,
    ):
        super().__init__(app)
        self.gate = AuthorizationGate(registry, verifier)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        decision = await self.gate.evaluate(request, path=route_path(request.scope))
        request.state.gate_decision = decision

        if not decision.allowed:
            return error_response(decision.error)
        return await call_next(request)


def protect_routes(
    app: FastAPI,
    routes: ProtectedRouteRegistry | Mapping[str, bool],
    verifier: Verifier | None = None,
    settings: Settings | None = None,
) -> ProtectedRouteRegistry:
    """
    Install the protected-routes middleware on an app.

    Patterns are compiled here, so a bad pattern fails at startup.

    Args:
        app: Application to protect
        routes: {pattern: enabled} table, or a prebuilt registry
        verifier: Credential verifier; a JWTVerifier built from settings if None
        settings: Settings for the default verifier (global settings by default)

    Returns:
        The registry the middleware enforces
    """
    registry = routes if isinstance(routes, ProtectedRouteRegistry) else ProtectedRouteRegistry(routes)

    if verifier is None:
        from app.auth.verifier import JWTVerifier

        verifier = JWTVerifier.from_settings(settings or default_settings)

    app.add_middleware(ProtectedRoutesMiddleware, registry=registry, verifier=verifier)
    return registry
