"""Timing Middleware - Match latency logging.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

from routetree_core.middleware.base import Middleware

logger = logging.getLogger(__name__)


@dataclass
class TimingConfig:
    """Timing middleware configuration."""

    level: int = logging.DEBUG
    slow_threshold_ms: Optional[float] = None


class MatchTimer:
    """Measures time from the prefix pass to a successful match.

    Register ``timer.start`` as a prefix unit and ``timer.stop`` as a
    suffix unit. Requests that never match leave the timer armed; the
    next ``start`` resets it.

    Usage:
        timer = MatchTimer()
        router.add_prefix_middleware(timer.start)
        router.add_suffix_middleware(timer.stop)
    """

    def __init__(self, config: Optional[TimingConfig] = None):
        self.config = config or TimingConfig()
        self.start = _Start(self)
        self.stop = _Stop(self)
        self.request_id: Optional[str] = None
        self.last_duration_ms: Optional[float] = None
        self.matched = 0
        self._started_at: Optional[float] = None

    def _begin(self) -> None:
        self.request_id = str(uuid.uuid4())[:8]
        self._started_at = time.perf_counter()

    def _end(self) -> None:
        if self._started_at is None:
            logger.warning("MatchTimer.stop ran without a matching start")
            return

        duration_ms = (time.perf_counter() - self._started_at) * 1000
        self._started_at = None
        self.last_duration_ms = duration_ms
        self.matched += 1

        threshold = self.config.slow_threshold_ms
        if threshold is not None and duration_ms > threshold:
            logger.warning(f"[{self.request_id}] slow match ({duration_ms:.2f}ms)")
        else:
            logger.log(self.config.level, f"[{self.request_id}] matched ({duration_ms:.2f}ms)")


class _Start(Middleware):
    def __init__(self, timer: MatchTimer):
        self._timer = timer

    def __call__(self) -> None:
        self._timer._begin()


class _Stop(Middleware):
    def __init__(self, timer: MatchTimer):
        self._timer = timer

    def __call__(self) -> None:
        self._timer._end()


__all__ = [
    "MatchTimer",
    "TimingConfig",
]
