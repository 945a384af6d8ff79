"""Route Node - Tree node and terminal route definitions.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Tuple

from routetree_core.errors import (
    InvalidMiddleware,
    InvalidRouteDefinition,
    describe_kind,
)

DEFAULT_METHODS: FrozenSet[str] = frozenset({"GET"})


@dataclass(frozen=True)
class RouteDefinition:
    """Terminal route attached to a tree node.

    The handler is called with the captured parameter mapping as its
    only argument. Middleware units take no arguments and run in
    registration order right before the handler.
    """

    handler: Callable[[Dict[str, str]], Any]
    methods: FrozenSet[str] = DEFAULT_METHODS
    middleware: Tuple[Callable[[], Any], ...] = ()
    pattern: str = "/"

    def __post_init__(self):
        """Validate and freeze the definition."""
        if not callable(self.handler):
            raise InvalidRouteDefinition(
                f"Route callback must be callable. Received: {describe_kind(self.handler)}"
            )

        methods = self.methods
        if isinstance(methods, str):
            methods = (methods,)
        methods = frozenset(methods)
        if not methods:
            raise InvalidRouteDefinition(
                f"Route {self.pattern!r} must allow at least one method"
            )
        for method in methods:
            if not isinstance(method, str) or not method:
                raise InvalidRouteDefinition(
                    f"HTTP methods must be non-empty strings. Received: {describe_kind(method)}"
                )

        middleware = tuple(self.middleware)
        for unit in middleware:
            if not callable(unit):
                raise InvalidMiddleware(
                    f"Route middleware must be callable. Received: {describe_kind(unit)}"
                )

        # Frozen dataclass; normalized values go through object.__setattr__
        object.__setattr__(self, "methods", methods)
        object.__setattr__(self, "middleware", middleware)

    def allows(self, method: str) -> bool:
        """Check if the request method is accepted (exact match)."""
        return method in self.methods


class RouteNode:
    """A node in the segment-keyed route tree.

    ``param_name`` is a positional marker: when matching reaches this
    node, the *next* request segment is captured under that name.
    """

    __slots__ = ("children", "param_name", "route")

    def __init__(self) -> None:
        # Literal segment children: "users" -> node
        self.children: Dict[str, RouteNode] = {}
        self.param_name: Optional[str] = None
        self.route: Optional[RouteDefinition] = None

    def child(self, segment: str) -> Optional["RouteNode"]:
        """Get child node for a literal segment."""
        return self.children.get(segment)

    def ensure_child(self, segment: str) -> "RouteNode":
        """Get or create the child node for a literal segment."""
        node = self.children.get(segment)
        if node is None:
            node = RouteNode()
            self.children[segment] = node
        return node

    @property
    def is_terminal(self) -> bool:
        return self.route is not None

    def walk(self, prefix: Tuple[str, ...] = ()) -> Iterable[Tuple[Tuple[str, ...], "RouteNode"]]:
        """Yield (segments, node) pairs depth-first, this node first."""
        yield prefix, self
        for segment, child in self.children.items():
            yield from child.walk(prefix + (segment,))

    def __repr__(self) -> str:
        return (
            f"RouteNode(children={sorted(self.children)!r}, "
            f"param_name={self.param_name!r}, route={self.route is not None})"
        )


@dataclass
class RouteMatch:
    """Result of a successful tree lookup."""

    route: RouteDefinition
    params: Dict[str, str] = field(default_factory=dict)


__all__ = [
    "DEFAULT_METHODS",
    "RouteDefinition",
    "RouteNode",
    "RouteMatch",
]
