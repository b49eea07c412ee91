"""Invocation deadline shared by every outbound call of a relay run."""

from __future__ import annotations

import threading
import time
from typing import Any, Optional


class Deadline:
    """A monotonic time budget that can also be cancelled explicitly.

    ``Deadline()`` without a budget never expires on its own.
    """

    def __init__(self, seconds: Optional[float] = None) -> None:
        self._expires_at = None if seconds is None else time.monotonic() + seconds
        self._cancelled = threading.Event()

    @classmethod
    def from_lambda_context(cls, context: Any) -> "Deadline":
        get_remaining = getattr(context, "get_remaining_time_in_millis", None)
        if get_remaining is None:
            return cls()
        return cls(get_remaining() / 1000.0)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left, ``0.0`` once cancelled or expired, ``None`` if unbounded."""
        if self._cancelled.is_set():
            return 0.0
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def bound(self, timeout: float) -> float:
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)
