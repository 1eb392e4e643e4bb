"""Replay-enabled synchronous view model."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from replay_engine.history import DEFAULT_HISTORY_LIMIT, AvailabilityCallback, Scheduler

from .base import ReplayHost

T = TypeVar("T")


class ReplayViewModel(ReplayHost[T]):
    """Business-logic container whose post-change hook feeds the history.

    Subclasses add domain methods built on ``update_state`` and
    ``transform_state``. Overrides of ``on_state_changed`` must call
    ``super()`` to keep recording.
    """

    def __init__(
        self,
        initial_state: T,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        debounce_ms: Optional[float] = None,
        on_can_undo_changed: Optional[AvailabilityCallback] = None,
        on_can_redo_changed: Optional[AvailabilityCallback] = None,
        scheduler: Optional[Scheduler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._data = initial_state
        self._initializing = True
        try:
            self.init()
        finally:
            self._initializing = False
        self._init_history(
            self._data,
            history_limit=history_limit,
            debounce_ms=debounce_ms,
            on_can_undo_changed=on_can_undo_changed,
            on_can_redo_changed=on_can_redo_changed,
            scheduler=scheduler,
            logger_name=logger_name,
        )

    def init(self) -> None:
        """Hook run at construction; the state it leaves becomes the first entry.

        Writes made here update ``data`` and notify listeners but are not
        recorded individually.
        """

    @property
    def data(self) -> T:
        return self._data

    def update_state(self, new_state: T) -> None:
        self._commit(new_state, notify=True)

    def update_silently(self, new_state: T) -> None:
        self._commit(new_state, notify=False)

    def transform_state(self, transform: Callable[[T], T]) -> None:
        self._commit(transform(self._data), notify=True)

    def transform_state_silently(self, transform: Callable[[T], T]) -> None:
        self._commit(transform(self._data), notify=False)

    def on_state_changed(self, previous: T, next_state: T) -> None:
        """Hook invoked after every state change."""

        del previous
        if not self.is_performing_undo_redo:
            self.history.record_debounced(next_state)

    def apply_historical_state(self, snapshot: T) -> None:
        self.update_state(snapshot)

    def _current_snapshot(self) -> Any:
        return self._data

    def _commit(self, new_state: T, *, notify: bool) -> None:
        if self._disposed:
            return
        previous = self._data
        self._data = new_state
        if notify:
            self.notify_listeners()
        if not self._initializing:
            self.on_state_changed(previous, new_state)


__all__ = ["ReplayViewModel"]
