from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict, List, Optional

from services.errors import TelemetryConnectionError


@dataclass(frozen=True)
class RecordedEvent:
    event_type: str
    payload: Dict[str, Any]


@dataclass
class InMemorySink:
    """Records everything handed to it instead of sending it anywhere."""

    ready_error: Optional[Exception] = None
    events: List[RecordedEvent] = field(default_factory=list)
    wait_ready_calls: List[float] = field(default_factory=list)
    flush_calls: List[float] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def wait_ready(self, timeout: float) -> None:
        with self._lock:
            self.wait_ready_calls.append(timeout)
        if self.ready_error is not None:
            raise self.ready_error

    def record_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            self.events.append(RecordedEvent(event_type=event_type, payload=dict(payload)))

    def flush(self, timeout: float) -> None:
        with self._lock:
            self.flush_calls.append(timeout)


def failing_ready_sink(reason: str = "connection failed") -> InMemorySink:
    return InMemorySink(ready_error=TelemetryConnectionError(reason))
