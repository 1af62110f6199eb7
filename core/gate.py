# =============================================================================
# core/gate.py - Authorization Gate
# =============================================================================
# Decides, per request, whether a credential must be verified before the
# request reaches its handler, and runs the verifier when it must.
#
# The gate only knows two collaborators:
# - ProtectedRouteRegistry: which paths are protected
# - a verifier: async callable that accepts the request, records the
#   authenticated identity on it, or raises an authentication error
#
# It keeps no per-request state and does not log, retry or transform errors.
# =============================================================================

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from core.registry import ProtectedRouteRegistry
from core.routing import strip_query

Verifier = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True)
class GateDecision:
    """
    Outcome of running the gate for one request.

    Attributes:
        allowed: Whether the request may continue to its handler
        matched: Registry entry that protected the request (None if unprotected)
        error: Exception raised by the verifier when the request was denied
    """
    allowed: bool
    matched: str | None = None
    error: BaseException | None = None

    @classmethod
    def allow(cls, matched: str | None = None) -> "GateDecision":
        return cls(allowed=True, matched=matched)

    @classmethod
    def deny(cls, matched: str, error: BaseException) -> "GateDecision":
        return cls(allowed=False, matched=matched, error=error)

    @property
    def protected(self) -> bool:
        return self.matched is not None


class AuthorizationGate:
    """
    Request-interception logic for protected routes.

    Usage:
        gate = AuthorizationGate({"/api/users/profile": True}, verifier)
        decision = await gate.evaluate(request)
        if not decision.allowed:
            ...  # respond with decision.error
    """

    def __init__(
        self,
        registry: ProtectedRouteRegistry | Mapping[str, bool],
        verifier: Verifier,
    ):
        if not isinstance(registry, ProtectedRouteRegistry):
            registry = ProtectedRouteRegistry(registry)
        self.registry = registry
        self.verifier = verifier

    async def evaluate(self, request: Any, path: str | None = None) -> GateDecision:
        """
        Run the gate for a single request.

        Args:
            request: Request object handed to the verifier
            path: Request target to check; defaults to the ASGI scope path,
                the same value the router dispatches on

        Returns:
            GateDecision - allowed unprotected, allowed verified, or denied
        """
        if path is None:
            path = request.scope["path"]

        matched = self.registry.match(strip_query(path))
        if matched is None:
            return GateDecision.allow()

        try:
            await self.verifier(request)
        except Exception as e:
            return GateDecision.deny(matched, e)

        return GateDecision.allow(matched)
