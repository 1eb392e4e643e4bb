"""Public undo/redo surface shared by every replay host."""

from __future__ import annotations

from typing import Any, Generic, Optional, Tuple, TypeVar

from replay_engine.runtime import telemetry

from .config import MISSING, HistoryConfig
from .debounce import DebounceCoalescer
from .host import HistoryHost
from .notifier import Availability, AvailabilityNotifier
from .scheduler import Scheduler
from .store import HistoryStore

T = TypeVar("T")


class UndoRedoController(Generic[T]):
    """Owns one timeline and applies historical snapshots back to its host.

    The controller is either idle (recording enabled) or applying a snapshot
    (recording suppressed). The applying flag is set only for the duration of
    one ``host.apply_historical_state`` call and is cleared on every exit path.

    If the host raises while applying, the exception propagates but the
    current index stays at the attempted position; the controller does not
    roll back or retry.
    """

    def __init__(
        self,
        host: HistoryHost[T],
        initial: Any = MISSING,
        *,
        config: Optional[HistoryConfig] = None,
        scheduler: Optional[Scheduler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.config = config or HistoryConfig()
        self._host = host
        self._logger_name = logger_name
        self._store: HistoryStore[T] = HistoryStore(
            initial, history_limit=self.config.history_limit
        )
        self.notifier = AvailabilityNotifier(
            self.config.on_undo_availability_changed,
            self.config.on_redo_availability_changed,
        )
        self._coalescer: DebounceCoalescer[T] = DebounceCoalescer(
            self._record_now,
            interval_ms=self.config.debounce_ms,
            scheduler=scheduler,
            logger_name=logger_name,
        )
        self._applying = False
        self._disposed = False
        telemetry.record_event(
            "history.initialize",
            level="debug",
            data={
                "history_limit": self.config.history_limit,
                "debounce_ms": self.config.debounce_ms,
                "seeded": initial is not MISSING,
            },
            logger_name=logger_name,
        )

    # ----------------------------------------------------------------- queries
    @property
    def can_undo(self) -> bool:
        return self._store.can_undo

    @property
    def can_redo(self) -> bool:
        return self._store.can_redo

    @property
    def length(self) -> int:
        return self._store.length

    @property
    def current_index(self) -> int:
        return self._store.current_index

    @property
    def history_limit(self) -> int:
        return self.config.history_limit

    @property
    def is_applying_history(self) -> bool:
        return self._applying

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def has_pending_write(self) -> bool:
        return self._coalescer.has_pending

    @property
    def current(self) -> T:
        return self._store.current

    def snapshots(self) -> Tuple[T, ...]:
        return self._store.snapshots()

    def peek(self, index: int, default: Optional[T] = None) -> Optional[T]:
        return self._store.peek(index, default)

    # ---------------------------------------------------------------- recording
    def record(self, snapshot: T) -> None:
        if self._accepts_writes("record"):
            self._record_now(snapshot)

    def record_debounced(self, snapshot: T) -> None:
        if self._accepts_writes("record_debounced"):
            self._coalescer.submit(snapshot)

    def flush_pending(self) -> bool:
        """Record a pending debounced write immediately, if there is one."""

        if self._disposed:
            return False
        return self._coalescer.flush()

    def _record_now(self, snapshot: T) -> None:
        # debounce timers land here too, so re-check the guard
        if not self._accepts_writes("record"):
            return
        before = self._availability()
        self._store.record(snapshot)
        self.notifier.notify(before, self._availability())
        telemetry.record_event(
            "history.record",
            level="debug",
            data={"index": self._store.current_index, "length": self._store.length},
            logger_name=self._logger_name,
        )

    def _accepts_writes(self, operation: str) -> bool:
        if not self._disposed and not self._applying:
            return True
        telemetry.record_event(
            "history.record_dropped",
            level="debug",
            data={
                "operation": operation,
                "reason": "disposed" if self._disposed else "applying",
            },
            logger_name=self._logger_name,
        )
        return False

    # --------------------------------------------------------------- navigation
    def undo(self) -> None:
        if self._navigable() and self._store.can_undo:
            self._apply_index(self._store.current_index - 1, "undo")

    def redo(self) -> None:
        if self._navigable() and self._store.can_redo:
            self._apply_index(self._store.current_index + 1, "redo")

    def jump_to(self, index: int) -> None:
        if not self._navigable():
            return
        if not 0 <= index < self._store.length:
            telemetry.record_event(
                "history.jump_ignored",
                level="debug",
                data={"index": index, "length": self._store.length},
                logger_name=self._logger_name,
            )
            return
        if index == self._store.current_index:
            return
        self._apply_index(index, "jump")

    def _navigable(self) -> bool:
        # nested navigation from inside apply_historical_state is ignored
        return not self._disposed and not self._applying

    def _apply_index(self, index: int, operation: str) -> None:
        before = self._availability()
        with telemetry.span(
            f"history::{operation}",
            logger_name=self._logger_name,
            component="history",
            metadata={"from_index": self._store.current_index, "to_index": index},
        ):
            self._applying = True
            try:
                snapshot = self._store.move_to(index)
                self._host.apply_historical_state(snapshot)
            except Exception:
                self._applying = False
                self._notify_after_failure(before, operation)
                raise
            finally:
                self._applying = False
        self.notifier.notify(before, self._availability())

    def _notify_after_failure(self, before: Availability, operation: str) -> None:
        # the host error propagates; a failing observer must not replace it
        try:
            self.notifier.notify(before, self._availability())
        except Exception as exc:
            telemetry.record_event(
                "history.observer_failed",
                level="error",
                data={"operation": operation, "error": repr(exc)},
                logger_name=self._logger_name,
            )

    # ---------------------------------------------------------------- lifecycle
    def clear(self, snapshot: Any = MISSING) -> None:
        """Reset to ``[snapshot]``, or to an empty timeline when omitted."""

        if self._disposed:
            return
        before = self._availability()
        self._store.clear(snapshot)
        self.notifier.notify(before, self._availability())
        telemetry.record_event(
            "history.clear",
            level="debug",
            data={"length": self._store.length},
            logger_name=self._logger_name,
        )

    def dispose(self) -> None:
        """Cancel any pending debounced write and drop the timeline."""

        if self._disposed:
            return
        self._coalescer.dispose()
        self._store.clear()
        self._disposed = True
        telemetry.record_event(
            "history.dispose", level="debug", logger_name=self._logger_name
        )

    def _availability(self) -> Availability:
        return Availability(
            can_undo=self._store.can_undo, can_redo=self._store.can_redo
        )


__all__ = ["UndoRedoController"]
