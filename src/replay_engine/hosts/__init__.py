"""State holders that embed the history engine."""

from .async_viewmodel import AsyncState, AsyncStatus, ReplayAsyncViewModel
from .base import ReplayHost
from .value import ReplayValue
from .viewmodel import ReplayViewModel

__all__ = [
    "AsyncState",
    "AsyncStatus",
    "ReplayAsyncViewModel",
    "ReplayHost",
    "ReplayValue",
    "ReplayViewModel",
]
