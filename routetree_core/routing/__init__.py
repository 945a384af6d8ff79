"""Routing module - Route tree construction and matching."""

from routetree_core.routing.node import RouteDefinition, RouteMatch, RouteNode
from routetree_core.routing.tree import RouteTree

__all__ = [
    "RouteTree",
    "RouteNode",
    "RouteDefinition",
    "RouteMatch",
]
