"""Router - Registration surface and request dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from routetree_core.dispatch.request import (
    DispatchOutcome,
    DispatchResult,
    Request,
    Response,
)
from routetree_core.errors import (
    HandlerDefect,
    InvalidArgumentKind,
    MethodNotAllowed,
    RouteMismatch,
    RoutingNotConfigured,
    describe_kind,
)
from routetree_core.middleware.base import MiddlewareChain, run_units
from routetree_core.routing.node import RouteDefinition, RouteMatch
from routetree_core.routing.tree import RouteTree
from routetree_core.utils.config import RouterConfig, load_config
from routetree_core.utils.helpers import Pattern, split_path

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "routetree_core"


class Router:
    """Request Router.

    Features:
    - Segment tree routing with positional parameters (/users/{id}/show)
    - Prefix units (before matching) and suffix units (after a match)
    - Per-route middleware and method filtering
    - Fallback, default and page error handlers

    Usage:
        router = Router()
        router.get("/users/{id}/show", show_user)
        router.set_fallback(not_found)
        router.add_prefix_middleware(open_session)

        result = router.handle_request("/users/42/show", "GET")
        if result.handled:
            body = result.value

    Routes are registered once at start-up. The tree is not locked, so
    late registration under concurrent requests needs outside
    synchronization.
    """

    def __init__(self, config: Optional[RouterConfig] = None):
        self.config = config or RouterConfig()
        self._tree = self._new_tree()
        self._prefix = MiddlewareChain("prefix")
        self._suffix = MiddlewareChain("suffix")
        self._fallback: Optional[Callable] = None
        self._default: Optional[Callable] = None
        self._page_error: Optional[Callable] = None

    @classmethod
    def from_config(
        cls,
        path: Optional[str] = None,
        env_prefix: str = "ROUTER_",
    ) -> "Router":
        """Build a router from a config file and environment.

        Also applies the configured log level to the package logger.
        """
        config = load_config(path, env_prefix=env_prefix)
        logging.getLogger(PACKAGE_LOGGER).setLevel(config.log_level.upper())
        logger.info(
            f"Router configured (case_sensitive={config.case_sensitive}, "
            f"default_methods={config.default_methods})"
        )
        return cls(config)

    @property
    def case_sensitive(self) -> bool:
        return self.config.case_sensitive

    @property
    def tree(self) -> RouteTree:
        return self._tree

    def _new_tree(self) -> RouteTree:
        return RouteTree(
            case_sensitive=self.config.case_sensitive,
            default_methods=self.config.default_methods,
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def set_fallback(self, fallback: Callable) -> "Router":
        """Set the handler used when no route matches."""
        self._fallback = _require_callable(fallback, "Fallback")
        return self

    def set_default(self, default: Callable) -> "Router":
        """Set the handler used for an empty path ("" or "/")."""
        self._default = _require_callable(default, "Default")
        return self

    def set_page_error(self, page_error: Callable) -> "Router":
        """Set the handler used when a matched route cannot be called."""
        self._page_error = _require_callable(page_error, "Page error handler")
        return self

    def set_routes(self, routes: Union[RouteTree, Dict[str, Any]]) -> "Router":
        """Replace the whole route tree.

        Args:
            routes: A RouteTree, or nested mapping of pattern tokens to
                handlers (see RouteTree.from_mapping)

        Raises:
            InvalidRoutesFormat: If routes is not structured data
        """
        if isinstance(routes, RouteTree):
            if routes.case_sensitive != self.config.case_sensitive:
                logger.warning(
                    f"Route tree case_sensitive={routes.case_sensitive} differs from "
                    f"router case_sensitive={self.config.case_sensitive}"
                )
            tree = routes
        else:
            tree = RouteTree.from_mapping(
                routes,
                case_sensitive=self.config.case_sensitive,
                default_methods=self.config.default_methods,
            )

        self._tree = tree
        logger.info(f"Route tree replaced ({len(tree)} routes)")
        return self

    def add_prefix_middleware(self, units: Union[Callable, Iterable[Callable]]) -> "Router":
        """Add units run before any path inspection."""
        self._prefix.add(units)
        return self

    def add_suffix_middleware(self, units: Union[Callable, Iterable[Callable]]) -> "Router":
        """Add units run after a successful match."""
        self._suffix.add(units)
        return self

    def add_route(
        self,
        pattern: Pattern,
        handler: Callable,
        methods: Optional[Iterable[str]] = None,
        middleware: Optional[Union[Callable, Iterable[Callable]]] = None,
    ) -> "Router":
        """Add a route.

        Args:
            pattern: URL pattern (e.g., "/users/{id}/show")
            handler: Called with the captured params mapping
            methods: HTTP methods (default: config.default_methods)
            middleware: Route middleware run before the handler
        """
        route = self._tree.insert(pattern, handler, methods=methods, middleware=middleware)
        logger.debug(f"Registered {sorted(route.methods)} {route.pattern}")
        return self

    def _verb(
        self,
        method: str,
        pattern: Pattern,
        handler: Optional[Callable],
        middleware: Optional[Iterable[Callable]],
    ) -> Any:
        if handler is not None:
            return self.add_route(pattern, handler, methods=[method], middleware=middleware)

        def decorator(func: Callable) -> Callable:
            self.add_route(pattern, func, methods=[method], middleware=middleware)
            return func

        return decorator

    def get(self, pattern: Pattern, handler: Optional[Callable] = None, middleware=None):
        """Add GET route, or return a decorator when handler is omitted."""
        return self._verb("GET", pattern, handler, middleware)

    def post(self, pattern: Pattern, handler: Optional[Callable] = None, middleware=None):
        """Add POST route."""
        return self._verb("POST", pattern, handler, middleware)

    def put(self, pattern: Pattern, handler: Optional[Callable] = None, middleware=None):
        """Add PUT route."""
        return self._verb("PUT", pattern, handler, middleware)

    def delete(self, pattern: Pattern, handler: Optional[Callable] = None, middleware=None):
        """Add DELETE route."""
        return self._verb("DELETE", pattern, handler, middleware)

    def patch(self, pattern: Pattern, handler: Optional[Callable] = None, middleware=None):
        """Add PATCH route."""
        return self._verb("PATCH", pattern, handler, middleware)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, request: Request) -> DispatchResult:
        """Handle a Request object."""
        return self.handle_request(request.path, request.method)

    def handle_request(self, path: str, method: str = "GET") -> DispatchResult:
        """Handle a request through prefixes, matching, suffixes and the route.

        Args:
            path: Decoded request path
            method: HTTP method, compared case-sensitively

        Returns:
            DispatchResult describing the terminal state

        Raises:
            RoutingNotConfigured: If no route was ever registered
        """
        if self._tree.is_empty:
            raise RoutingNotConfigured()

        logger.debug(f"--> {method} {path}")
        self._prefix.run()

        segments = split_path(path, case_sensitive=self.config.case_sensitive)
        if not segments:
            return self._empty_path()

        try:
            match = self._lookup(segments, path)
        except RouteMismatch as e:
            return self._not_found(e)

        self._suffix.run()

        route = match.route
        try:
            self._check(route, method)
        except HandlerDefect as e:
            return self._handler_defect(e, match)
        except MethodNotAllowed as e:
            return self._method_not_allowed(e, match)

        run_units(route.middleware)
        value = route.handler(match.params)
        logger.debug(f"<-- {method} {path} handled by {route.pattern}")
        return DispatchResult(
            outcome=DispatchOutcome.HANDLED,
            value=value,
            route=route,
            params=match.params,
        )

    def _lookup(self, segments: List[str], path: str) -> RouteMatch:
        match = self._tree.match(segments)
        if match is None:
            raise RouteMismatch(path)
        return match

    def _check(self, route: RouteDefinition, method: str) -> None:
        if not callable(route.handler):
            raise HandlerDefect(route.pattern, route.handler)
        if not route.allows(method):
            raise MethodNotAllowed(method, route.methods)

    def _empty_path(self) -> DispatchResult:
        if self._default is not None:
            return DispatchResult(DispatchOutcome.DEFAULT, value=self._default())
        return DispatchResult(
            DispatchOutcome.EMPTY_PATH,
            response=Response.html(self.config.empty_path_body),
        )

    def _not_found(self, error: RouteMismatch) -> DispatchResult:
        logger.debug(str(error))
        if self._fallback is not None:
            return DispatchResult(DispatchOutcome.FALLBACK, value=self._fallback())
        return DispatchResult(DispatchOutcome.NOT_FOUND)

    def _handler_defect(self, error: HandlerDefect, match: RouteMatch) -> DispatchResult:
        logger.error(str(error))
        result = DispatchResult(
            DispatchOutcome.PAGE_ERROR,
            route=match.route,
            params=match.params,
        )
        if self._page_error is not None:
            result.value = self._page_error()
        elif self._fallback is not None:
            result.value = self._fallback()
        else:
            result.response = Response.html(self.config.page_error_body, status=500)
        return result

    def _method_not_allowed(self, error: MethodNotAllowed, match: RouteMatch) -> DispatchResult:
        logger.debug(str(error))
        return DispatchResult(
            DispatchOutcome.METHOD_NOT_ALLOWED,
            response=Response.text(
                self.config.method_not_allowed_body,
                status=405,
                headers={"Allow": error.allow_header},
            ),
            route=match.route,
            params=match.params,
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def routes(self) -> List[Tuple[str, RouteDefinition]]:
        """Get all registered (pattern, route) pairs."""
        return list(self._tree.routes())

    def get_stats(self) -> Dict[str, Any]:
        """Get router statistics."""
        return {
            "routes": len(self._tree),
            "prefix_middleware": len(self._prefix),
            "suffix_middleware": len(self._suffix),
            "fallback": self._fallback is not None,
            "default": self._default is not None,
            "page_error": self._page_error is not None,
            "case_sensitive": self.config.case_sensitive,
        }


def _require_callable(value: Any, label: str) -> Callable:
    if not callable(value):
        raise InvalidArgumentKind(
            f"{label} must be callable. Received: {describe_kind(value)}"
        )
    return value


__all__ = [
    "Router",
]
