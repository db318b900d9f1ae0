"""Bounded target lookup state.

The tutorial positioner polls for a step's target widget because the widget
may be created only after the step's action ran (a modal opening, a tab
switching). This module keeps the pure decision logic apart from the Qt
timers: callers report each lookup attempt via ``check`` and get back
whether to keep polling, proceed, or fall back to a centered layout.

The fallback never happens before ``timeout_ms`` elapsed since ``begin``.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional
import time

__all__ = ["LookupStatus", "TargetLookup", "monotonic_ms"]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class LookupStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    FOUND = "found"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class TargetLookup:
    def __init__(self, timeout_ms: float = 3000, clock: Callable[[], float] | None = None):
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")
        self.timeout_ms = timeout_ms
        self._clock = clock or monotonic_ms
        self._started: Optional[float] = None
        self._status = LookupStatus.IDLE

    @property
    def status(self) -> LookupStatus:
        return self._status

    @property
    def elapsed_ms(self) -> float:
        if self._started is None:
            return 0.0
        return self._clock() - self._started

    def begin(self) -> None:
        self._started = self._clock()
        self._status = LookupStatus.PENDING

    def check(self, found: bool) -> LookupStatus:
        """Record one lookup attempt and return the resulting status."""
        if self._status is not LookupStatus.PENDING:
            return self._status
        if found:
            self._status = LookupStatus.FOUND
        elif self.elapsed_ms >= self.timeout_ms:
            self._status = LookupStatus.TIMED_OUT
        return self._status

    def cancel(self) -> None:
        if self._status is LookupStatus.PENDING:
            self._status = LookupStatus.CANCELLED
