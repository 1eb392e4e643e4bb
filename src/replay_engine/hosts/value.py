"""Replay-enabled wrapper around a single reactive value."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from replay_engine.history import DEFAULT_HISTORY_LIMIT, AvailabilityCallback, Scheduler

from .base import ReplayHost

T = TypeVar("T")


class ReplayValue(ReplayHost[T]):
    """Holds one value and records every write, silent or not.

    ``update_state`` notifies listeners; ``update_silently`` does not, but both
    go into history.
    """

    def __init__(
        self,
        create: Callable[[], T],
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        debounce_ms: Optional[float] = None,
        on_can_undo_changed: Optional[AvailabilityCallback] = None,
        on_can_redo_changed: Optional[AvailabilityCallback] = None,
        scheduler: Optional[Scheduler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._value = create()
        self._value_listener: Optional[Callable[[T], None]] = None
        self._init_history(
            self._value,
            history_limit=history_limit,
            debounce_ms=debounce_ms,
            on_can_undo_changed=on_can_undo_changed,
            on_can_redo_changed=on_can_redo_changed,
            scheduler=scheduler,
            logger_name=logger_name,
        )

    @property
    def value(self) -> T:
        return self._value

    def update_state(self, new_state: T) -> None:
        self._write(new_state, notify=True)

    def update_silently(self, new_state: T) -> None:
        self._write(new_state, notify=False)

    def transform_state(self, transform: Callable[[T], T]) -> None:
        self._write(transform(self._value), notify=True)

    def transform_state_silently(self, transform: Callable[[T], T]) -> None:
        self._write(transform(self._value), notify=False)

    def listen(self, callback: Callable[[T], None]) -> T:
        """Call ``callback`` with every notified value; return the current one."""

        self._value_listener = callback
        return self._value

    def stop_listening(self) -> None:
        self._value_listener = None

    def reset_history(self) -> None:
        self.history.clear(self._value)

    def notify_listeners(self) -> None:
        super().notify_listeners()
        if self._value_listener is not None:
            self._value_listener(self._value)

    def apply_historical_state(self, snapshot: T) -> None:
        self._value = snapshot
        self.notify_listeners()

    def _current_snapshot(self) -> Any:
        return self._value

    def _write(self, new_state: T, *, notify: bool) -> None:
        if self._disposed:
            return
        self._value = new_state
        if notify:
            self.notify_listeners()
        self.history.record_debounced(new_state)

    def dispose(self) -> None:
        self._value_listener = None
        super().dispose()


__all__ = ["ReplayValue"]
