# backoff_sequencer/__init__.py

from ._utils import event_timer
from .config import BackoffConfig
from .options import (
    build_config,
    options_from_env,
    with_max,
    with_min,
    with_multiplier,
    with_terminate,
)
from .schedule import DelaySchedule, planned_delays
from .sequence import (
    AsyncExponentialBackoff,
    ExponentialBackoff,
    async_exponential,
    exponential,
)

__all__ = [
    # sequence
    "AsyncExponentialBackoff",
    "ExponentialBackoff",
    "async_exponential",
    "exponential",
    # config
    "BackoffConfig",
    "build_config",
    "options_from_env",
    "with_max",
    "with_min",
    "with_multiplier",
    "with_terminate",
    # schedule
    "DelaySchedule",
    "planned_delays",
    # timing
    "event_timer",
]
