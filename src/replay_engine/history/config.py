"""Immutable configuration captured when a history engine is created."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

AvailabilityCallback = Callable[[bool], None]

DEFAULT_HISTORY_LIMIT = 100


class _Missing:
    """Marker for "no snapshot given", distinct from a ``None`` snapshot."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class HistoryConfigError(ValueError):
    """Raised when a history engine is configured with unusable values."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Limits, debounce interval and availability callbacks for one engine.

    ``debounce_ms`` of ``None`` records every write immediately. The callbacks
    receive the new value of ``can_undo`` / ``can_redo`` and fire only when it
    flips.
    """

    history_limit: int = DEFAULT_HISTORY_LIMIT
    debounce_ms: Optional[float] = None
    on_undo_availability_changed: Optional[AvailabilityCallback] = None
    on_redo_availability_changed: Optional[AvailabilityCallback] = None

    def __post_init__(self) -> None:
        limit = self.history_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise HistoryConfigError(
                f"history_limit must be a positive integer, got {limit!r}",
                field_name="history_limit",
            )
        interval = self.debounce_ms
        if interval is not None and (
            isinstance(interval, bool)
            or not isinstance(interval, (int, float))
            or interval <= 0
        ):
            raise HistoryConfigError(
                f"debounce_ms must be positive when set, got {self.debounce_ms!r}",
                field_name="debounce_ms",
            )

    @property
    def is_debounced(self) -> bool:
        return self.debounce_ms is not None

    def with_changes(self, **changes: object) -> "HistoryConfig":
        return replace(self, **changes)  # type: ignore[arg-type]


__all__ = [
    "AvailabilityCallback",
    "DEFAULT_HISTORY_LIMIT",
    "HistoryConfig",
    "HistoryConfigError",
    "MISSING",
]
