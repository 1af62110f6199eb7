# =============================================================================
# core/registry.py - Protected-Route Registry
# =============================================================================
# Immutable table of route patterns that require a verified credential.
#
# The table is built once at startup from a {pattern: enabled} mapping.
# Enabled patterns are compiled up front, so request handling only runs
# precompiled matchers and never builds regexes.
# =============================================================================

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from core.routing import compile_route_pattern, strip_query


class ProtectedRouteRegistry:
    """
    Read-only mapping of route pattern -> enabled flag.

    Lookups check the exact path first, then the enabled patterns in the
    order they were configured. The first pattern that matches wins.

    Raises:
        RoutePatternError: At construction, if an enabled pattern is invalid
    """

    __slots__ = ("_routes", "_compiled")

    def __init__(self, routes: Mapping[str, bool] | None = None):
        table = {str(pattern): bool(enabled) for pattern, enabled in (routes or {}).items()}
        self._routes: Mapping[str, bool] = MappingProxyType(table)
        self._compiled: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
            (pattern, compile_route_pattern(pattern))
            for pattern, enabled in table.items()
            if enabled
        )

    @property
    def routes(self) -> Mapping[str, bool]:
        """The configured table, including disabled entries."""
        return self._routes

    @property
    def enabled_patterns(self) -> tuple[str, ...]:
        return tuple(pattern for pattern, _ in self._compiled)

    def match(self, url: str) -> str | None:
        """
        Find the registry entry protecting a request target.

        Args:
            url: Request path, with or without a query string

        Returns:
            The exact path or pattern that protects the request, or None
        """
        path = strip_query(url)

        if self._routes.get(path):
            return path

        for pattern, regex in self._compiled:
            if regex.fullmatch(path):
                return pattern
        return None

    def is_protected(self, url: str) -> bool:
        return self.match(url) is not None

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._routes

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"ProtectedRouteRegistry({dict(self._routes)!r})"
