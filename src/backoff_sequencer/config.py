# backoff_sequencer/config.py

from datetime import timedelta

from pydantic import BaseModel, ConfigDict


class BackoffConfig(BaseModel):
    """
    Immutable configuration for an exponential backoff sequence.

    Durations accept either a timedelta or a number of seconds. Field types
    are validated on construction, but nonsensical combinations (for example
    a min_delay above max_delay, or a multiplier below one) are accepted and
    resolved by the delay schedule rather than rejected here.

    Attributes:
        min_delay: Wait performed after the first step.
        max_delay: Ceiling the wait is clamped to and never exceeds.
        multiplier: Factor applied to the wait after every step.
        terminate: End the sequence, after one final step, once the wait
            has reached max_delay.
    """

    model_config = ConfigDict(frozen=True)

    min_delay: timedelta = timedelta(seconds=1)
    max_delay: timedelta = timedelta(hours=1)
    multiplier: float = 2.0
    terminate: bool = False

    @property
    def min_seconds(self) -> float:
        """
        The minimum delay as floating point seconds.

        Returns:
            float: min_delay in seconds.
        """
        return self.min_delay.total_seconds()

    @property
    def max_seconds(self) -> float:
        """
        The ceiling as floating point seconds.

        Returns:
            float: max_delay in seconds.
        """
        return self.max_delay.total_seconds()
