"""Undo/redo time travel for reactive state holders."""

from replay_engine.history import (
    MISSING,
    AsyncioScheduler,
    CallbackHost,
    HistoryConfig,
    HistoryConfigError,
    HistoryHost,
    ManualScheduler,
    UndoRedoController,
)
from replay_engine.hosts import (
    AsyncState,
    ReplayAsyncViewModel,
    ReplayValue,
    ReplayViewModel,
)

__all__ = [
    "AsyncState",
    "AsyncioScheduler",
    "CallbackHost",
    "HistoryConfig",
    "HistoryConfigError",
    "HistoryHost",
    "MISSING",
    "ManualScheduler",
    "ReplayAsyncViewModel",
    "ReplayValue",
    "ReplayViewModel",
    "UndoRedoController",
]

__version__ = "0.1.0"
