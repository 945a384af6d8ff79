"""Request/Response - Dispatch inputs and outcomes.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from routetree_core.routing.node import RouteDefinition


@dataclass
class Request:
    """Request as handed over by the transport layer.

    Path and method are expected to be decoded already; the router
    only lower-cases and splits the path.
    """

    method: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_target(cls, method: str, target: str) -> "Request":
        """Build from a request-line target such as ``/users?page=2``."""
        query = {}
        path = target
        if "?" in target:
            path, query_string = target.split("?", 1)
            for param in query_string.split("&"):
                if "=" in param:
                    key, value = param.split("=", 1)
                    query[key] = value
        return cls(method=method, path=path, query=query)


@dataclass
class Response:
    """Built-in response produced when no user callable answers."""

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    # Status messages the router can emit
    STATUS_MESSAGES = {
        200: "OK",
        405: "Method Not Allowed",
        500: "Internal Server Error",
    }

    @property
    def status_message(self) -> str:
        """Get status message."""
        return self.STATUS_MESSAGES.get(self.status, "Unknown")

    @classmethod
    def text(
        cls,
        text: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create text response."""
        resp_headers = dict(headers or {})
        resp_headers["Content-Type"] = "text/plain"
        return cls(status=status, body=text.encode(), headers=resp_headers)

    @classmethod
    def html(
        cls,
        html: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create HTML response."""
        resp_headers = dict(headers or {})
        resp_headers["Content-Type"] = "text/html"
        return cls(status=status, body=html.encode(), headers=resp_headers)


class DispatchOutcome(Enum):
    """Terminal state reached by handle_request."""

    DEFAULT = "default"
    EMPTY_PATH = "empty_path"
    FALLBACK = "fallback"
    NOT_FOUND = "not_found"
    PAGE_ERROR = "page_error"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    HANDLED = "handled"


@dataclass
class DispatchResult:
    """What handle_request did with a request.

    ``value`` is the return value of whichever user callable answered
    (handler, fallback, default or page error handler). ``response`` is
    set only when the router answered with built-in output.
    """

    outcome: DispatchOutcome
    value: Any = None
    response: Optional[Response] = None
    route: Optional[RouteDefinition] = None
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def status(self) -> Optional[int]:
        """Status of the built-in response, if any."""
        return self.response.status if self.response is not None else None

    @property
    def handled(self) -> bool:
        return self.outcome is DispatchOutcome.HANDLED


__all__ = [
    "Request",
    "Response",
    "DispatchOutcome",
    "DispatchResult",
]
