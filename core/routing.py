# =============================================================================
# core/routing.py - Route Pattern Matching
# =============================================================================
# Turns route templates such as "/api/articles/update/:id" into compiled
# regular expressions and tests concrete request paths against them.
#
# Usage:
#   from core.routing import matches
#   matches("/api/articles/update/42", "/api/articles/update/:id")  # True
# =============================================================================

import functools
import re

# A ":name" token runs until the next slash
PARAM_TOKEN = re.compile(r":[^/]+")

# Placeholder matching exactly one path segment
SEGMENT_PLACEHOLDER = "[^/]+"


class RoutePatternError(ValueError):
    """Raised when a route pattern does not compile into a matcher."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


def strip_query(url: str) -> str:
    """
    Return the path part of a request target, discarding any query string.

    Example:
        strip_query("/api/users/profile?x=1")  # "/api/users/profile"
    """
    return url.split("?", 1)[0]


@functools.lru_cache(maxsize=1024)
def compile_route_pattern(pattern: str) -> re.Pattern[str]:
    """
    Compile a route template into an anchored regular expression.

    Every ":name" token is replaced with a single-segment wildcard and the
    result is anchored at both ends. The rest of the template is used as-is,
    so regex metacharacters in literal segments keep their regex meaning.

    Args:
        pattern: Route template, e.g. "/api/articles/update/:id"

    Returns:
        Compiled pattern, e.g. for "^/api/articles/update/[^/]+$"

    Raises:
        RoutePatternError: If the substituted template is not a valid regex
    """
    source = "^" + PARAM_TOKEN.sub(SEGMENT_PLACEHOLDER, pattern) + "$"
    try:
        return re.compile(source)
    except re.error as e:
        raise RoutePatternError(pattern, str(e)) from e


def matches(path: str, pattern: str) -> bool:
    """Check whether a query-less request path matches a route template."""
    return compile_route_pattern(pattern).fullmatch(path) is not None
