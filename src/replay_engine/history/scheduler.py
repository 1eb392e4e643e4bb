"""Cancellable single-shot timers used by the debounce layer.

Two implementations share the ``Scheduler`` protocol:

* ``AsyncioScheduler`` schedules on the running event loop.
* ``ManualScheduler`` keeps deadlines and fires them when the host pumps
  ``process_due`` (for example from a UI interval timer). Tests drive it with
  a fake clock.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs ``callback`` once after ``delay`` seconds unless cancelled."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    """Schedules timers on an asyncio loop (the running one by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise RuntimeError(
                    "AsyncioScheduler needs a running event loop; pass a loop "
                    "explicitly or use ManualScheduler"
                ) from exc
        return loop.call_later(delay, callback)


@dataclass
class ScheduledCall:
    deadline: float
    callback: Callable[[], None]
    generation: int
    _owner: Optional["ManualScheduler"] = field(default=None, repr=False)

    def cancel(self) -> None:
        if self._owner is not None:
            self._owner._discard(self.generation)
            self._owner = None


class ManualScheduler:
    """Deadline-based timers fired on demand by the host."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._pending: Dict[int, ScheduledCall] = {}
        self._counter = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        self._counter += 1
        call = ScheduledCall(
            deadline=self._clock() + delay,
            callback=callback,
            generation=self._counter,
            _owner=self,
        )
        self._pending[call.generation] = call
        return call

    def process_due(self) -> int:
        """Fire every timer whose deadline has passed; return how many fired."""

        now = self._clock()
        due = sorted(
            (call for call in self._pending.values() if call.deadline <= now),
            key=lambda call: (call.deadline, call.generation),
        )
        return self._fire(due)

    def flush(self) -> int:
        """Fire every pending timer regardless of its deadline."""

        pending = sorted(
            self._pending.values(), key=lambda call: (call.deadline, call.generation)
        )
        return self._fire(pending)

    def _fire(self, calls: list[ScheduledCall]) -> int:
        fired = 0
        for call in calls:
            # an earlier callback may have cancelled this one
            if self._pending.pop(call.generation, None) is None:
                continue
            call._owner = None
            call.callback()
            fired += 1
        return fired

    def _discard(self, generation: int) -> None:
        self._pending.pop(generation, None)


__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "ScheduledCall",
    "Scheduler",
    "TimerHandle",
]
