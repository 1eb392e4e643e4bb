"""History engine: bounded timeline, debounce layer and undo/redo controller."""

from .config import (
    DEFAULT_HISTORY_LIMIT,
    MISSING,
    AvailabilityCallback,
    HistoryConfig,
    HistoryConfigError,
)
from .controller import UndoRedoController
from .debounce import DebounceCoalescer
from .host import CallbackHost, HistoryHost
from .notifier import Availability, AvailabilityKind, AvailabilityNotifier
from .scheduler import AsyncioScheduler, ManualScheduler, ScheduledCall, Scheduler
from .store import HistoryStore

__all__ = [
    "Availability",
    "AvailabilityCallback",
    "AvailabilityKind",
    "AvailabilityNotifier",
    "AsyncioScheduler",
    "CallbackHost",
    "DEFAULT_HISTORY_LIMIT",
    "DebounceCoalescer",
    "HistoryConfig",
    "HistoryConfigError",
    "HistoryHost",
    "HistoryStore",
    "MISSING",
    "ManualScheduler",
    "ScheduledCall",
    "Scheduler",
    "UndoRedoController",
]
