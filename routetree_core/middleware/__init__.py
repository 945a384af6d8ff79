"""Middleware module - Prefix, suffix and route middleware."""

from routetree_core.middleware.base import Middleware, MiddlewareChain, run_units
from routetree_core.middleware.timing import MatchTimer, TimingConfig

__all__ = [
    "Middleware",
    "MiddlewareChain",
    "run_units",
    "MatchTimer",
    "TimingConfig",
]
