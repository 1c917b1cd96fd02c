# _utils/gate.py

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

Timer = Callable[[float, threading.Event], None]
AsyncSleep = Callable[[float], Awaitable[None]]


def event_timer(seconds: float, signal: threading.Event) -> None:
    """
    Block for the given number of seconds, or until the signal is set.

    Waiting on the event itself lets a cancellation from another thread wake
    the caller immediately, without polling.
    """
    signal.wait(seconds)


def wait_or_cancel(
    seconds: float,
    signal: threading.Event,
    timer: Timer = event_timer,
) -> bool:
    """
    Wait for a delay unless the cancellation signal fires first.

    Negative delays are waited as zero. If the signal is set once the timer
    returns, cancellation wins, even when the delay also elapsed.

    Args:
        seconds (float): Delay to wait, in seconds.
        signal (threading.Event): Cancellation signal.
        timer (Timer): Strategy that performs the wait.

    Returns:
        bool: True if the delay elapsed, False if cancelled.
    """
    timer(max(seconds, 0.0), signal)

    if signal.is_set():
        logger.debug("Backoff wait of %.3fs cancelled.", seconds)
        return False

    return True


async def async_wait_or_cancel(
    seconds: float,
    signal: asyncio.Event,
    sleep: AsyncSleep = asyncio.sleep,
) -> bool:
    """
    Await a delay unless the cancellation signal fires first.

    Races the sleep against the signal and cancels whichever is still
    pending, on every exit path, so no timer task outlives the call. If the
    signal is set once the race settles, cancellation wins.

    Args:
        seconds (float): Delay to wait, in seconds.
        signal (asyncio.Event): Cancellation signal.
        sleep (AsyncSleep): Strategy that performs the wait.

    Returns:
        bool: True if the delay elapsed, False if cancelled.
    """
    if signal.is_set():
        return False

    timer = asyncio.ensure_future(sleep(max(seconds, 0.0)))
    cancelled = asyncio.ensure_future(signal.wait())

    try:
        await asyncio.wait({timer, cancelled}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        await _discard(timer, cancelled)

    if signal.is_set():
        logger.debug("Backoff wait of %.3fs cancelled.", seconds)
        return False

    # re-raise anything the sleep strategy raised
    if not timer.cancelled():
        timer.result()
    return True


async def _discard(*tasks: asyncio.Future) -> None:
    """
    Cancel any of the given tasks that are still pending and wait for them
    to settle.
    """
    for task in tasks:
        task.cancel()

    await asyncio.gather(*tasks, return_exceptions=True)
