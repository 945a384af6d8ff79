"""Dispatch module - Router façade and request outcomes."""

from routetree_core.dispatch.router import Router
from routetree_core.dispatch.request import (
    DispatchOutcome,
    DispatchResult,
    Request,
    Response,
)

__all__ = [
    "Router",
    "Request",
    "Response",
    "DispatchOutcome",
    "DispatchResult",
]
