"""Route Tree - Segment-keyed route storage and lookup.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from routetree_core.errors import (
    InvalidRouteDefinition,
    InvalidRoutesFormat,
    describe_kind,
)
from routetree_core.middleware.base import as_units
from routetree_core.routing.node import (
    DEFAULT_METHODS,
    RouteDefinition,
    RouteMatch,
    RouteNode,
)
from routetree_core.utils.helpers import (
    Pattern,
    join_pattern,
    param_token_name,
    parse_pattern,
)

logger = logging.getLogger(__name__)


class RouteTree:
    """Route tree with positional parameter capture.

    Parameters do not get their own nodes. A ``{name}`` token marks the
    node reached by the preceding literal, and at match time the request
    segment right after that literal is captured:

        tree = RouteTree()
        tree.insert("/users/{id}/show", show_user)
        match = tree.match(["users", "42", "show"])
        match.params  # {"id": "42"}

    A parameter therefore needs a literal on both sides in the pattern.
    Trailing parameters are accepted but cannot be captured reliably.
    """

    def __init__(
        self,
        case_sensitive: bool = False,
        default_methods: Optional[Iterable[str]] = None,
    ):
        self.root = RouteNode()
        self.case_sensitive = case_sensitive
        self.default_methods = frozenset(default_methods or DEFAULT_METHODS)

    def insert(
        self,
        pattern: Pattern,
        handler: Callable,
        methods: Optional[Iterable[str]] = None,
        middleware: Optional[Union[Callable, Iterable[Callable]]] = None,
    ) -> RouteDefinition:
        """Register a route.

        Args:
            pattern: "/users/{id}/show" or a sequence of tokens
            handler: Called with the captured params mapping
            methods: Allowed HTTP methods (default: GET)
            middleware: One unit or an iterable of units run before the handler

        Returns:
            The stored route definition
        """
        try:
            tokens = parse_pattern(pattern)
        except TypeError as e:
            raise InvalidRouteDefinition(str(e)) from e

        rendered = join_pattern(tokens)
        if any(param_token_name(token) == "" for token in tokens):
            raise InvalidRouteDefinition(
                f"Empty parameter name in route pattern {rendered!r}"
            )

        units = as_units(middleware, "route middleware") if middleware is not None else []
        route = RouteDefinition(
            handler=handler,
            methods=self.default_methods if methods is None else methods,
            middleware=tuple(units),
            pattern=rendered,
        )

        node = self.root
        pending_param: Optional[str] = None

        for token in tokens:
            name = param_token_name(token)
            if name is None:
                if not self.case_sensitive:
                    token = token.lower()
                node = node.ensure_child(token)
                pending_param = None
                continue

            if node is self.root:
                logger.warning(
                    f"Parameter {{{name}}} in {rendered!r} sits at root position and is never captured"
                )
            if node.param_name is not None and node.param_name != name:
                logger.warning(
                    f"Parameter {{{name}}} in {rendered!r} replaces {{{node.param_name}}} at the same position"
                )
            # Marker only; traversal stays on this node
            node.param_name = name
            pending_param = name

        if pending_param is not None:
            logger.warning(
                f"Trailing parameter {{{pending_param}}} in {rendered!r} has no literal after it; "
                "its value cannot be captured reliably"
            )

        if node.route is not None:
            logger.debug(f"Route {rendered!r} overwrites {node.route.pattern!r}")
        node.route = route
        return route

    def match(self, segments: Sequence[str]) -> Optional[RouteMatch]:
        """Match request segments against the tree.

        The deepest terminal route reached wins. Any segment without a
        child node fails the whole lookup.

        Returns:
            RouteMatch if a terminal route was reached, None otherwise
        """
        node = self.root
        params: Dict[str, str] = {}
        best: Optional[RouteMatch] = None

        i = 0
        while i < len(segments):
            child = node.child(segments[i])
            if child is None:
                return None
            node = child

            if node.route is not None:
                best = RouteMatch(route=node.route, params=dict(params))

            if node.param_name is not None:
                i += 1
                if i < len(segments):
                    params[node.param_name] = segments[i]
                else:
                    logger.debug(f"No segment left to capture {{{node.param_name}}}")

            i += 1

        return best

    def routes(self) -> Iterator[Tuple[str, RouteDefinition]]:
        """Iterate (pattern, route) pairs depth-first."""
        for _segments, node in self.root.walk():
            if node.route is not None:
                yield node.route.pattern, node.route

    @property
    def is_empty(self) -> bool:
        """True when no terminal route exists anywhere in the tree."""
        return next(self.routes(), None) is None

    def __len__(self) -> int:
        return sum(1 for _ in self.routes())

    @classmethod
    def from_mapping(
        cls,
        data: Any,
        case_sensitive: bool = False,
        default_methods: Optional[Iterable[str]] = None,
    ) -> "RouteTree":
        """Build a tree from nested structured data.

        Keys are pattern tokens; values are handlers, RouteDefinitions
        or nested mappings. The key ``""`` attaches a route to the
        mapping's own position::

            RouteTree.from_mapping({
                "": home,
                "users": {
                    "": list_users,
                    "{id}": {"show": show_user},
                },
            })
        """
        if not isinstance(data, Mapping):
            raise InvalidRoutesFormat(
                f"Routes provided are not in mapping format. Format provided: {describe_kind(data)}"
            )

        tree = cls(case_sensitive=case_sensitive, default_methods=default_methods)
        for tokens, value in _flatten(data, []):
            try:
                if isinstance(value, RouteDefinition):
                    tree.insert(tokens, value.handler, value.methods, value.middleware)
                else:
                    tree.insert(tokens, value)
            except InvalidRouteDefinition as e:
                raise InvalidRoutesFormat(
                    f"Invalid route at {join_pattern(tokens)!r}: {e}"
                ) from e
        return tree


def _flatten(data: Mapping, prefix: List[str]) -> Iterator[Tuple[List[str], Any]]:
    """Yield (tokens, leaf) pairs from nested route data."""
    for key, value in data.items():
        if not isinstance(key, str):
            raise InvalidRoutesFormat(
                f"Route keys must be strings. Received: {describe_kind(key)}"
            )
        tokens = prefix + parse_pattern(key)
        if isinstance(value, Mapping):
            yield from _flatten(value, tokens)
        elif callable(value) or isinstance(value, RouteDefinition):
            yield tokens, value
        else:
            raise InvalidRoutesFormat(
                f"Route {join_pattern(tokens)!r} must map to a callable or a nested mapping. "
                f"Received: {describe_kind(value)}"
            )


__all__ = [
    "RouteTree",
]
