"""Write coalescing in front of the history store."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from replay_engine.runtime import telemetry

from .config import MISSING
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

T = TypeVar("T")


class DebounceCoalescer(Generic[T]):
    """Merges rapid submissions into one sink call per quiet interval.

    With no interval every ``submit`` reaches the sink immediately. With an
    interval, each submission re-arms a single timer and replaces the pending
    value; only the last value is delivered when the timer fires.
    """

    def __init__(
        self,
        sink: Callable[[T], None],
        *,
        interval_ms: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self._sink = sink
        self._interval_ms = interval_ms
        self._scheduler = scheduler
        if interval_ms is not None and scheduler is None:
            self._scheduler = AsyncioScheduler()
        self._logger_name = logger_name
        self._timer: Optional[TimerHandle] = None
        self._pending: Any = MISSING
        self._disposed = False

    @property
    def interval_ms(self) -> Optional[float]:
        return self._interval_ms

    @property
    def has_pending(self) -> bool:
        return self._pending is not MISSING

    def submit(self, snapshot: T) -> None:
        if self._disposed:
            return
        if self._interval_ms is None or self._scheduler is None:
            self._sink(snapshot)
            return

        # previous timer and value survive a failing call_later
        timer = self._scheduler.call_later(self._interval_ms / 1000.0, self._on_timer)
        self._cancel_timer()
        self._timer = timer
        self._pending = snapshot
        telemetry.record_event(
            "history.debounce_armed",
            level="debug",
            data={"interval_ms": self._interval_ms},
            logger_name=self._logger_name,
        )

    def flush(self) -> bool:
        """Deliver the pending value now; return whether there was one."""

        self._cancel_timer()
        return self._deliver()

    def cancel(self) -> None:
        self._cancel_timer()
        self._pending = MISSING

    def dispose(self) -> None:
        self.cancel()
        self._disposed = True

    def _on_timer(self) -> None:
        self._timer = None
        self._deliver()

    def _deliver(self) -> bool:
        if self._pending is MISSING:
            return False
        snapshot, self._pending = self._pending, MISSING
        self._sink(snapshot)
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


__all__ = ["DebounceCoalescer"]
