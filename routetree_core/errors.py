"""Errors - Exception hierarchy shared by the tree, middleware and router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable


class RouterError(Exception):
    """Base for all routing errors."""


class ConfigurationError(RouterError):
    """Router is not usable in its current configuration."""


class RoutingNotConfigured(ConfigurationError):
    """Raised by handle_request when no route was ever registered."""

    def __init__(self, message: str = "No routes defined. Use set_routes() or add_route() first."):
        super().__init__(message)


class ValidationError(RouterError, TypeError):
    """A registration call received an unusable value."""


class InvalidRouteDefinition(ValidationError):
    """Route handler, methods or pattern are invalid."""


class InvalidMiddleware(ValidationError):
    """A middleware unit is not callable."""


class InvalidArgumentKind(ValidationError):
    """Fallback, default or page error handler is not callable."""


class InvalidRoutesFormat(ValidationError):
    """Bulk route data is not structured the way set_routes expects."""


class RouteMismatch(RouterError):
    """No tree path matches the request segments."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No route matches {path!r}")


class HandlerDefect(RouterError):
    """Matched route carries a handler that cannot be called."""

    def __init__(self, pattern: str, handler: Any):
        self.pattern = pattern
        self.handler = handler
        super().__init__(
            f"Handler for route {pattern!r} is not callable: {describe_kind(handler)}"
        )


class MethodNotAllowed(RouterError):
    """Path matched but the route does not accept the request method."""

    def __init__(self, method: str, allowed: Iterable[str]):
        self.method = method
        self.allowed: FrozenSet[str] = frozenset(allowed)
        super().__init__(
            f"Method {method} not allowed. Allowed methods: {self.allow_header}"
        )

    @property
    def allow_header(self) -> str:
        """Value for the Allow response header."""
        return ", ".join(sorted(self.allowed))


def describe_kind(value: Any) -> str:
    """Short type description used in validation messages."""
    if value is None:
        return "None"
    return type(value).__name__


__all__ = [
    "RouterError",
    "ConfigurationError",
    "RoutingNotConfigured",
    "ValidationError",
    "InvalidRouteDefinition",
    "InvalidMiddleware",
    "InvalidArgumentKind",
    "InvalidRoutesFormat",
    "RouteMismatch",
    "HandlerDefect",
    "MethodNotAllowed",
    "describe_kind",
]
