# backoff_sequencer/schedule.py

from collections.abc import Iterator
from datetime import timedelta

from .config import BackoffConfig


class DelaySchedule:
    """
    Mutable delay state for one run of an exponential backoff sequence.

    Starts at min_delay and multiplies the delay on every advance, clamping
    it to max_delay. The clamp assigns max_delay itself, so once reached the
    delay compares exactly equal to the ceiling on every later step.

    A schedule is owned by a single running sequence and is not safe to
    share between threads or tasks.
    """

    __slots__ = ("_ceiling", "_config", "_current", "_index")

    def __init__(self, config: BackoffConfig) -> None:
        """
        Initialise the schedule at step 0 with the minimum delay.

        Args:
            config (BackoffConfig): Frozen configuration driving the schedule.
        """
        self._config = config
        self._ceiling = config.max_seconds
        self._current = config.min_seconds
        self._index = 0

    def __repr__(self) -> str:
        return f"DelaySchedule(index={self._index}, current={self._current!r})"

    @property
    def config(self) -> BackoffConfig:
        return self._config

    @property
    def index(self) -> int:
        """
        The index of the most recently produced step.

        Returns:
            int: Step counter, starting at 0.
        """
        return self._index

    @property
    def current(self) -> float:
        """
        The next wait, in seconds.

        Returns:
            float: Current delay in seconds.
        """
        return self._current

    @property
    def delay(self) -> timedelta:
        """
        The next wait as a timedelta.

        Returns:
            timedelta: Current delay.
        """
        return timedelta(seconds=self._current)

    @property
    def at_ceiling(self) -> bool:
        """
        Whether the current delay has been clamped to the ceiling.

        Returns:
            bool: True if the current delay equals max_delay exactly.
        """
        return self._current == self._ceiling

    @property
    def finished(self) -> bool:
        """
        Whether the wait just performed was the last one.

        Returns:
            bool: True if the ceiling is reached and termination is enabled.
        """
        return self.at_ceiling and self._config.terminate

    def advance(self) -> None:
        """
        Move to the next step, growing the delay towards the ceiling.
        """
        self._index += 1
        self._current = min(self._current * self._config.multiplier, self._ceiling)


def planned_delays(
    config: BackoffConfig,
    *,
    limit: int | None = None,
) -> Iterator[timedelta]:
    """
    Yield the waits a sequence built from config would perform, in order.

    No time passes. With terminate enabled the series ends with the first
    wait at the ceiling; otherwise it is unbounded unless a limit is given.

    Args:
        config (BackoffConfig): Configuration to expand.
        limit (int | None): Maximum number of delays to yield.

    Returns:
        Iterator[timedelta]: The successive waits.
    """
    schedule = DelaySchedule(config)
    produced = 0

    while limit is None or produced < limit:
        yield schedule.delay
        produced += 1

        if schedule.finished:
            return

        schedule.advance()
