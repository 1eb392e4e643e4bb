"""Shared delegation surface for state holders that embed a history engine."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from replay_engine.history import (
    DEFAULT_HISTORY_LIMIT,
    MISSING,
    AvailabilityCallback,
    HistoryConfig,
    Scheduler,
    UndoRedoController,
)

T = TypeVar("T")


class ReplayHost(Generic[T]):
    """Holds an ``UndoRedoController`` and forwards the undo/redo surface to it.

    Subclasses own the actual state. They implement ``apply_historical_state``
    and ``_current_snapshot`` and call ``history.record_debounced`` after each
    write. Writes made while a snapshot is being applied are dropped by the
    controller.
    """

    history: UndoRedoController[T]

    def __init__(self) -> None:
        self._listeners: list[Callable[[], None]] = []
        self._disposed = False

    def _init_history(
        self,
        initial: Any,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        debounce_ms: Optional[float] = None,
        on_can_undo_changed: Optional[AvailabilityCallback] = None,
        on_can_redo_changed: Optional[AvailabilityCallback] = None,
        scheduler: Optional[Scheduler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        config = HistoryConfig(
            history_limit=history_limit,
            debounce_ms=debounce_ms,
            on_undo_availability_changed=on_can_undo_changed,
            on_redo_availability_changed=on_can_redo_changed,
        )
        self.history = UndoRedoController(
            self,
            initial,
            config=config,
            scheduler=scheduler,
            logger_name=logger_name or "replay_engine.hosts",
        )

    def apply_historical_state(self, snapshot: T) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def _current_snapshot(self) -> Any:  # pragma: no cover - abstract override
        raise NotImplementedError

    # listeners
    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def notify_listeners(self) -> None:
        for callback in list(self._listeners):
            callback()

    # history surface
    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def history_length(self) -> int:
        return self.history.length

    @property
    def current_history_index(self) -> int:
        return self.history.current_index

    @property
    def is_performing_undo_redo(self) -> bool:
        return self.history.is_applying_history

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def undo(self) -> None:
        self.history.undo()

    def redo(self) -> None:
        self.history.redo()

    def jump_to(self, index: int) -> None:
        self.history.jump_to(index)

    def peek(self, index: int) -> Optional[T]:
        return self.history.peek(index)

    def clear_history(self, snapshot: Any = MISSING) -> None:
        """Keep only ``snapshot`` (the current state by default) in history."""

        if snapshot is MISSING:
            snapshot = self._current_snapshot()
        self.history.clear(snapshot)

    def dispose(self) -> None:
        if self._disposed:
            return
        self.history.dispose()
        self._listeners.clear()
        self._disposed = True


__all__ = ["ReplayHost"]
