"""Replay-enabled asynchronous view model that only tracks successful data."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Generic, Literal, Optional, TypeVar

from replay_engine.history import (
    DEFAULT_HISTORY_LIMIT,
    MISSING,
    AvailabilityCallback,
    Scheduler,
)
from replay_engine.runtime import telemetry

from .base import ReplayHost

T = TypeVar("T")

AsyncStatus = Literal["initial", "loading", "success", "error"]


@dataclass(frozen=True, slots=True)
class AsyncState(Generic[T]):
    status: AsyncStatus = "initial"
    data: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def initial(cls) -> "AsyncState[T]":
        return cls()

    @classmethod
    def loading(cls) -> "AsyncState[T]":
        return cls(status="loading")

    @classmethod
    def success(cls, data: T) -> "AsyncState[T]":
        return cls(status="success", data=data)

    @classmethod
    def failed(cls, error: BaseException) -> "AsyncState[T]":
        return cls(status="error", error=error)

    @property
    def is_initial(self) -> bool:
        return self.status == "initial"

    @property
    def is_loading(self) -> bool:
        return self.status == "loading"

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def is_error(self) -> bool:
        return self.status == "error"


class ReplayAsyncViewModel(ReplayHost[T]):
    """Async container whose history holds success values only.

    Loading, error and initial transitions never reach the history, so the
    timeline stays empty until the first successful ``init`` (or
    ``update_state``), unless the view model is constructed with an
    ``AsyncState.success`` value, in which case that data seeds the history.
    Subclasses implement ``init``.
    """

    def __init__(
        self,
        initial: Optional[AsyncState[T]] = None,
        *,
        load_on_init: bool = False,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        debounce_ms: Optional[float] = None,
        on_can_undo_changed: Optional[AvailabilityCallback] = None,
        on_can_redo_changed: Optional[AvailabilityCallback] = None,
        scheduler: Optional[Scheduler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._state: AsyncState[T] = initial or AsyncState.initial()
        self._logger_name = logger_name
        self._init_history(
            self._recordable(self._state),
            history_limit=history_limit,
            debounce_ms=debounce_ms,
            on_can_undo_changed=on_can_undo_changed,
            on_can_redo_changed=on_can_redo_changed,
            scheduler=scheduler,
            logger_name=logger_name,
        )
        self.init_task: Optional[asyncio.Task[None]] = None
        if load_on_init:
            self.init_task = asyncio.get_running_loop().create_task(self.reload())

    async def init(self) -> T:  # pragma: no cover - abstract override
        raise NotImplementedError

    @property
    def state(self) -> AsyncState[T]:
        return self._state

    @property
    def data(self) -> Optional[T]:
        return self._state.data

    async def reload(self) -> None:
        """Run ``init`` and publish loading, then success or error."""

        self._set_state(AsyncState.loading())
        try:
            result = await self.init()
        except Exception as exc:
            telemetry.record_event(
                "host.load_failed",
                level="warning",
                data={"host": type(self).__name__, "error": repr(exc)},
                logger_name=self._logger_name,
            )
            self._set_state(AsyncState.failed(exc))
            return
        self._set_state(AsyncState.success(result))

    def update_state(self, data: T) -> None:
        self._set_state(AsyncState.success(data))

    def transform_data_state(self, transform: Callable[[Optional[T]], Optional[T]]) -> None:
        self._set_state(AsyncState.success(transform(self._state.data)))

    def loading_state(self) -> None:
        self._set_state(AsyncState.loading())

    def error_state(self, error: BaseException) -> None:
        self._set_state(AsyncState.failed(error))

    def on_async_state_changed(
        self, previous: AsyncState[T], next_state: AsyncState[T]
    ) -> None:
        """Hook invoked after every async state transition."""

        del previous
        snapshot = self._recordable(next_state)
        if snapshot is not MISSING and not self.is_performing_undo_redo:
            self.history.record_debounced(snapshot)

    def apply_historical_state(self, snapshot: T) -> None:
        self.update_state(snapshot)

    def _current_snapshot(self) -> Any:
        return self._recordable(self._state)

    @staticmethod
    def _recordable(state: AsyncState[T]) -> Any:
        if state.is_success and state.data is not None:
            return state.data
        return MISSING

    def _set_state(self, new_state: AsyncState[T]) -> None:
        if self._disposed:
            return
        previous = self._state
        self._state = new_state
        self.notify_listeners()
        self.on_async_state_changed(previous, new_state)

    def dispose(self) -> None:
        if self.init_task is not None and not self.init_task.done():
            self.init_task.cancel()
        super().dispose()


__all__ = ["AsyncState", "AsyncStatus", "ReplayAsyncViewModel"]
