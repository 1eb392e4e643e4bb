"""Boundary types between the history engine and the state holders it serves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Protocol, TypeVar

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class HistoryHost(Protocol[T_contra]):
    """What the engine requires from anything that owns tracked state."""

    def apply_historical_state(self, snapshot: T_contra) -> None:
        """Make ``snapshot`` the visible state and notify the host's observers.

        Called synchronously during undo/redo/jump while recording is
        suppressed. Any write the host triggers must happen inside this call;
        a write deferred to a later loop iteration would be recorded as a new
        snapshot.
        """
        ...


@dataclass(slots=True)
class CallbackHost(Generic[T]):
    """Adapts a plain callable to ``HistoryHost``."""

    apply: Callable[[T], None]

    def apply_historical_state(self, snapshot: T) -> None:
        self.apply(snapshot)


__all__ = ["CallbackHost", "HistoryHost"]
