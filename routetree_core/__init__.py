"""RouteTree - Segment tree routing and request dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RouteTree locates the handler for a request path, captures positional
path parameters, validates the HTTP method and runs middleware around
the handler.

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                                Router                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                         Dispatch Pipeline                             │  │
│  │  Prefix ──▶ Segment ──▶ Match ──▶ Suffix ──▶ Method ──▶ Route MW ──▶  │  │
│  │                                                           Handler     │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                             │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐  │
│  │    Routing      │  │   Middleware    │  │        Dispatch             │  │
│  │                 │  │                 │  │                             │  │
│  │ - RouteTree     │  │ - Prefix chain  │  │ - Fallback (no match)       │  │
│  │ - RouteNode     │  │ - Suffix chain  │  │ - Default (empty path)      │  │
│  │ - Param capture │  │ - Route units   │  │ - Page error / 405          │  │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘  │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Request Flow:
1. Prefix units run before the path is inspected
2. Path is lower-cased (unless case-sensitive) and split on "/"
3. Empty path goes to the default handler
4. Tree lookup; no match goes to the fallback
5. Suffix units run after a match
6. Method check; disallowed methods get a 405
7. Route middleware, then handler(params)

Usage:
    from routetree_core import Router

    router = Router()
    router.get("/users/{id}/show", lambda params: f"user {params['id']}")
    router.set_fallback(lambda: "not found")

    result = router.handle_request("/users/42/show", "GET")
    assert result.value == "user 42"
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Errors
from routetree_core.errors import (
    RouterError,
    ConfigurationError,
    RoutingNotConfigured,
    ValidationError,
    InvalidRouteDefinition,
    InvalidMiddleware,
    InvalidArgumentKind,
    InvalidRoutesFormat,
    RouteMismatch,
    HandlerDefect,
    MethodNotAllowed,
)

# Routing
from routetree_core.routing.tree import RouteTree
from routetree_core.routing.node import RouteNode, RouteDefinition, RouteMatch

# Middleware
from routetree_core.middleware.base import Middleware, MiddlewareChain
from routetree_core.middleware.timing import MatchTimer, TimingConfig

# Dispatch
from routetree_core.dispatch.router import Router
from routetree_core.dispatch.request import (
    Request,
    Response,
    DispatchOutcome,
    DispatchResult,
)

# Utils
from routetree_core.utils.config import RouterConfig, load_config

__all__ = [
    # Version
    "__version__",
    # Errors
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
    # Routing
    "RouteTree",
    "RouteNode",
    "RouteDefinition",
    "RouteMatch",
    # Middleware
    "Middleware",
    "MiddlewareChain",
    "MatchTimer",
    "TimingConfig",
    # Dispatch
    "Router",
    "Request",
    "Response",
    "DispatchOutcome",
    "DispatchResult",
    # Utils
    "RouterConfig",
    "load_config",
]
