# backoff_sequencer/sequence.py

import asyncio
import logging
import threading
from collections.abc import AsyncIterator, Iterator

from ._utils import (
    AsyncSleep,
    Timer,
    async_wait_or_cancel,
    event_timer,
    wait_or_cancel,
)
from .config import BackoffConfig
from .options import Option, build_config
from .schedule import DelaySchedule

logger = logging.getLogger(__name__)


def exponential(
    signal: threading.Event | None = None,
    *options: Option,
    timer: Timer = event_timer,
) -> "ExponentialBackoff":
    """
    Create a blocking exponential backoff sequence for pacing a for loop.

    Each iteration of the returned object starts a fresh sequence of step
    indices 0, 1, 2, ... The first step is produced immediately; every later
    step is preceded by a wait that doubles (by default) from one second up
    to one hour. Breaking out of the loop ends the sequence without a
    further wait. Setting the signal cuts the current wait short and ends the
    sequence silently.

    Defaults: multiplier 2 (with_multiplier), min 1s (with_min), max 1h
    (with_max), runs forever (with_terminate).

    Args:
        signal (threading.Event | None): Cancellation signal; None means the
            sequence cannot be cancelled.
        *options (Option): Configuration options, applied in order.
        timer (Timer): Strategy performing each wait, replaceable in tests.

    Returns:
        ExponentialBackoff: Re-iterable sequence factory.
    """
    if signal is None:
        logger.debug("No cancellation signal given, backoff is not cancellable.")
        signal = threading.Event()

    return ExponentialBackoff(build_config(*options), signal, timer=timer)


def async_exponential(
    signal: asyncio.Event | None = None,
    *options: Option,
    sleep: AsyncSleep = asyncio.sleep,
) -> "AsyncExponentialBackoff":
    """
    Create an asyncio exponential backoff sequence for pacing an async for
    loop.

    Behaves as exponential(), except that waits are awaited and race an
    asyncio.Event rather than blocking the thread.

    Args:
        signal (asyncio.Event | None): Cancellation signal; None means the
            sequence cannot be cancelled.
        *options (Option): Configuration options, applied in order.
        sleep (AsyncSleep): Strategy performing each wait, replaceable in
            tests.

    Returns:
        AsyncExponentialBackoff: Re-iterable async sequence factory.
    """
    if signal is None:
        logger.debug("No cancellation signal given, backoff is not cancellable.")
        signal = asyncio.Event()

    return AsyncExponentialBackoff(build_config(*options), signal, sleep=sleep)


class ExponentialBackoff:
    """
    Blocking exponential backoff sequence factory.

    Iterating yields step indices, waiting between steps. Every call to
    iter() starts an independent run with its own DelaySchedule, so one
    factory can pace any number of loops one after another. A single
    iterator must not be driven from more than one thread.
    """

    __slots__ = ("_config", "_signal", "_timer")

    def __init__(
        self,
        config: BackoffConfig,
        signal: threading.Event,
        *,
        timer: Timer = event_timer,
    ) -> None:
        self._config = config
        self._signal = signal
        self._timer = timer

    def __repr__(self) -> str:
        return f"ExponentialBackoff(config={self._config!r})"

    @property
    def config(self) -> BackoffConfig:
        return self._config

    @property
    def signal(self) -> threading.Event:
        return self._signal

    def __iter__(self) -> Iterator[int]:
        """
        Start a fresh run of the sequence.

        Returns:
            Iterator[int]: Step indices, starting at 0.
        """
        schedule = DelaySchedule(self._config)

        if self._signal.is_set():
            return

        while True:
            yield schedule.index

            _log_wait(schedule)
            if not wait_or_cancel(schedule.current, self._signal, self._timer):
                return

            if schedule.finished:
                _log_final_step(schedule)
                yield schedule.index + 1
                return

            schedule.advance()


class AsyncExponentialBackoff:
    """
    Asyncio exponential backoff sequence factory.

    The async counterpart of ExponentialBackoff: every call to aiter()
    starts an independent run, and each wait races the sleep against the
    cancellation event. A single iterator must not be driven from more than
    one task.
    """

    __slots__ = ("_config", "_signal", "_sleep")

    def __init__(
        self,
        config: BackoffConfig,
        signal: asyncio.Event,
        *,
        sleep: AsyncSleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._signal = signal
        self._sleep = sleep

    def __repr__(self) -> str:
        return f"AsyncExponentialBackoff(config={self._config!r})"

    @property
    def config(self) -> BackoffConfig:
        return self._config

    @property
    def signal(self) -> asyncio.Event:
        return self._signal

    async def __aiter__(self) -> AsyncIterator[int]:
        """
        Start a fresh run of the sequence.

        Returns:
            AsyncIterator[int]: Step indices, starting at 0.
        """
        schedule = DelaySchedule(self._config)

        if self._signal.is_set():
            return

        while True:
            yield schedule.index

            _log_wait(schedule)
            if not await async_wait_or_cancel(
                schedule.current,
                self._signal,
                self._sleep,
            ):
                return

            if schedule.finished:
                _log_final_step(schedule)
                yield schedule.index + 1
                return

            schedule.advance()


def _log_wait(schedule: DelaySchedule) -> None:
    logger.debug(
        "BACKOFF: step %d done. Next step in %.3fs.",
        schedule.index,
        schedule.current,
    )


def _log_final_step(schedule: DelaySchedule) -> None:
    logger.debug(
        "BACKOFF: ceiling of %.3fs reached, producing final step %d.",
        schedule.current,
        schedule.index + 1,
    )
