# =============================================================================
# core/ - Authorization Logic Package
# =============================================================================
# This package contains framework-agnostic request-authorization logic:
# - routing.py: route template compilation and path matching
# - registry.py: immutable protected-route table
# - gate.py: per-request protect/verify decision
#
# Code in this package should NOT import from FastAPI or Starlette.
# This keeps the logic testable without a running server.
# =============================================================================

from core.gate import AuthorizationGate, GateDecision
from core.registry import ProtectedRouteRegistry
from core.routing import RoutePatternError, compile_route_pattern, matches, strip_query

__all__ = [
    "AuthorizationGate",
    "GateDecision",
    "ProtectedRouteRegistry",
    "RoutePatternError",
    "compile_route_pattern",
    "matches",
    "strip_query",
]
