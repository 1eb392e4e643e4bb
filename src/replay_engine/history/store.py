"""Bounded linear timeline of recorded snapshots."""

from __future__ import annotations

from typing import Any, Generic, List, Optional, Tuple, TypeVar

from .config import DEFAULT_HISTORY_LIMIT, MISSING, HistoryConfigError

T = TypeVar("T")


class HistoryStore(Generic[T]):
    """Ordered snapshots plus a single current position.

    Recording after one or more undos discards the redo tail first, then the
    oldest entry is evicted if the limit is exceeded. There is no branch tree:
    pruned snapshots are gone for good.
    """

    def __init__(
        self, initial: Any = MISSING, *, history_limit: int = DEFAULT_HISTORY_LIMIT
    ) -> None:
        if (
            isinstance(history_limit, bool)
            or not isinstance(history_limit, int)
            or history_limit <= 0
        ):
            raise HistoryConfigError(
                f"history_limit must be a positive integer, got {history_limit!r}",
                field_name="history_limit",
            )
        self._limit = history_limit
        self._entries: List[T] = []
        self._index: int = -1
        if initial is not MISSING:
            self.record(initial)

    @property
    def history_limit(self) -> int:
        return self._limit

    @property
    def length(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    @property
    def current(self) -> T:
        if self._index < 0:
            raise IndexError("History is empty")
        return self._entries[self._index]

    def record(self, snapshot: T) -> None:
        if self._index < len(self._entries) - 1:
            del self._entries[self._index + 1 :]

        self._entries.append(snapshot)
        self._index = len(self._entries) - 1

        if len(self._entries) > self._limit:
            del self._entries[0]
            self._index -= 1

    def peek(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """Return the snapshot at ``index`` or ``default`` when out of range.

        Negative indices are out of range; they do not count from the end.
        """

        if 0 <= index < len(self._entries):
            return self._entries[index]
        return default

    def move_to(self, index: int) -> T:
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"History index {index} out of range [0, {len(self._entries)})"
            )
        self._index = index
        return self._entries[index]

    def clear(self, snapshot: Any = MISSING) -> None:
        self._entries.clear()
        if snapshot is MISSING:
            self._index = -1
        else:
            self._entries.append(snapshot)
            self._index = 0

    def snapshots(self) -> Tuple[T, ...]:
        return tuple(self._entries)


__all__ = ["HistoryStore"]
