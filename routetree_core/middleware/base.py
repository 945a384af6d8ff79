"""Middleware Base - Middleware units and chains.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from routetree_core.errors import InvalidMiddleware, describe_kind

logger = logging.getLogger(__name__)

Unit = Callable[[], Any]


class Middleware(ABC):
    """Abstract middleware unit.

    Units take no arguments and cannot stop the request; whatever they
    return is ignored. Plain functions work just as well, this base is
    for stateful units.

    Pipeline:
    ┌──────────────────────────────────────────────────────────────┐
    │                     Dispatch Pipeline                        │
    │                                                              │
    │  Request ──▶ Prefix ──▶ Match ──▶ Suffix ──▶ Route MW        │
    │                                                  │           │
    │                                  Handler(params) ◀┘           │
    └──────────────────────────────────────────────────────────────┘
    """

    @abstractmethod
    def __call__(self) -> Any:
        """Run the unit."""
        pass


class MiddlewareChain:
    """Append-only chain of middleware units run in registration order."""

    def __init__(self, name: str = "middleware", units: Optional[Iterable[Unit]] = None):
        self.name = name
        self._units: List[Unit] = []
        if units is not None:
            self.add(units)

    def add(self, units: Union[Unit, Iterable[Unit]]) -> "MiddlewareChain":
        """Add one unit or an iterable of units.

        Every unit is validated before any is appended, so a bad entry
        leaves the chain untouched.

        Raises:
            InvalidMiddleware: If any unit is not callable
        """
        batch = as_units(units, self.name)

        for unit in batch:
            if not callable(unit):
                raise InvalidMiddleware(
                    f"{self.name.capitalize()} must be callable. Received: {describe_kind(unit)}"
                )

        self._units.extend(batch)
        logger.debug(f"Added {len(batch)} {self.name} unit(s), {len(self._units)} total")
        return self

    def run(self) -> int:
        """Invoke every unit in order. Returns the number run."""
        return run_units(self._units)

    def __iter__(self) -> Iterator[Unit]:
        return iter(tuple(self._units))

    def __len__(self) -> int:
        return len(self._units)


def run_units(units: Iterable[Unit]) -> int:
    """Invoke units in order, ignoring their results."""
    count = 0
    for unit in units:
        unit()
        count += 1
    return count


def as_units(units: Any, name: str = "middleware") -> List[Any]:
    """Normalize one unit or an iterable of units into a list.

    Only the container is checked here; callers validate each entry.
    """
    if callable(units):
        return [units]
    if isinstance(units, (str, bytes)):
        raise InvalidMiddleware(
            f"{name.capitalize()} must be callable. Received: {describe_kind(units)}"
        )
    try:
        return list(units)
    except TypeError:
        raise InvalidMiddleware(
            f"{name.capitalize()} must be callable. Received: {describe_kind(units)}"
        ) from None


__all__ = [
    "Middleware",
    "MiddlewareChain",
    "run_units",
    "as_units",
]
