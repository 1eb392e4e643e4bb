"""Fire-on-change notification for undo/redo availability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Literal, Optional

AvailabilityKind = Literal["can_undo", "can_redo"]


@dataclass(frozen=True, slots=True)
class Availability:
    can_undo: bool
    can_redo: bool


class AvailabilityNotifier:
    """Observer lists for ``can_undo`` and ``can_redo`` transitions."""

    def __init__(
        self,
        on_undo_changed: Optional[Callable[[bool], None]] = None,
        on_redo_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self._subscribers: Dict[str, list[Callable[[bool], None]]] = {
            "can_undo": [],
            "can_redo": [],
        }
        if on_undo_changed is not None:
            self.subscribe("can_undo", on_undo_changed)
        if on_redo_changed is not None:
            self.subscribe("can_redo", on_redo_changed)

    def subscribe(self, kind: AvailabilityKind, callback: Callable[[bool], None]) -> None:
        self._observers(kind).append(callback)

    def unsubscribe(
        self, kind: AvailabilityKind, callback: Callable[[bool], None]
    ) -> bool:
        observers = self._observers(kind)
        try:
            observers.remove(callback)
        except ValueError:
            return False
        return True

    def notify(self, previous: Availability, current: Availability) -> None:
        if current.can_undo != previous.can_undo:
            self._emit("can_undo", current.can_undo)
        if current.can_redo != previous.can_redo:
            self._emit("can_redo", current.can_redo)

    def _emit(self, kind: str, value: bool) -> None:
        for callback in list(self._subscribers[kind]):
            callback(value)

    def _observers(self, kind: str) -> list[Callable[[bool], None]]:
        try:
            return self._subscribers[kind]
        except KeyError as exc:
            raise ValueError(
                f"Unknown availability kind '{kind}', expected 'can_undo' or 'can_redo'"
            ) from exc


__all__ = ["Availability", "AvailabilityKind", "AvailabilityNotifier"]
