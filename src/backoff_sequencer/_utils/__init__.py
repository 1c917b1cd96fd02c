# _utils/__init__.py

from .gate import (
    AsyncSleep,
    Timer,
    async_wait_or_cancel,
    event_timer,
    wait_or_cancel,
)

__all__ = [
    "AsyncSleep",
    "Timer",
    "async_wait_or_cancel",
    "event_timer",
    "wait_or_cancel",
]
