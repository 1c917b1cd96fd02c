# backoff_sequencer/options.py

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from datetime import timedelta

from .config import BackoffConfig

logger = logging.getLogger(__name__)

Option = Callable[[BackoffConfig], BackoffConfig]

_TRUTHY_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})


def build_config(*options: Option) -> BackoffConfig:
    """
    Build a BackoffConfig from the defaults and the given options.

    Options are applied in the order given, so when several options set the
    same field the last one wins.

    Returns:
        BackoffConfig: The resolved, frozen configuration.
    """
    config = BackoffConfig()
    for option in options:
        config = option(config)
    return config


def with_min(delay: timedelta | float) -> Option:
    """
    Set the wait performed after the first step.

    Args:
        delay (timedelta | float): A timedelta or a number of seconds.

    Returns:
        Option: Function producing a config with min_delay overridden.
    """
    return _override("min_delay", delay)


def with_max(delay: timedelta | float) -> Option:
    """
    Set the ceiling the wait never exceeds.

    Args:
        delay (timedelta | float): A timedelta or a number of seconds.

    Returns:
        Option: Function producing a config with max_delay overridden.
    """
    return _override("max_delay", delay)


def with_multiplier(multiplier: float) -> Option:
    """
    Set the factor by which the wait grows after every step.

    Returns:
        Option: Function producing a config with multiplier overridden.
    """
    return _override("multiplier", multiplier)


def with_terminate(terminate: bool = True) -> Option:
    """
    End the sequence once the wait has reached the ceiling set by with_max.

    The argument is honoured: with_terminate(False) switches termination
    back off, even if an earlier option enabled it.

    Returns:
        Option: Function producing a config with terminate overridden.
    """
    return _override("terminate", terminate)


def options_from_env(
    prefix: str = "BACKOFF_",
    environ: Mapping[str, str] | None = None,
) -> list[Option]:
    """
    Read backoff overrides from environment variables.

    Recognises <prefix>MIN_SECONDS, <prefix>MAX_SECONDS, <prefix>MULTIPLIER
    and <prefix>TERMINATE. Only variables that are set produce an option, so
    the result can be splatted ahead of explicit options which then take
    precedence.

    Args:
        prefix (str): Variable name prefix, defaults to "BACKOFF_".
        environ (Mapping[str, str] | None): Source mapping, defaults to
            os.environ.

    Returns:
        list[Option]: Options for every recognised variable that is set.

    Raises:
        ValueError: If a numeric variable cannot be parsed.
    """
    env = os.environ if environ is None else environ

    options = [
        *_float_option(env, f"{prefix}MIN_SECONDS", with_min),
        *_float_option(env, f"{prefix}MAX_SECONDS", with_max),
        *_float_option(env, f"{prefix}MULTIPLIER", with_multiplier),
    ]

    terminate = env.get(f"{prefix}TERMINATE")
    if terminate is not None:
        options.append(with_terminate(terminate.strip().lower() in _TRUTHY_VALUES))

    if options:
        logger.debug("Loaded %d backoff option(s) from environment.", len(options))

    return options


def _override(field: str, value: object) -> Option:
    """
    Create an option that replaces a single config field.

    The replacement config is re-validated so that values such as plain
    seconds are coerced to the field's type.

    Returns:
        Option: Function returning a new config with the field replaced.
    """

    def apply(config: BackoffConfig) -> BackoffConfig:
        return BackoffConfig.model_validate({**config.model_dump(), field: value})

    return apply


def _float_option(
    env: Mapping[str, str],
    name: str,
    factory: Callable[[float], Option],
) -> Iterable[Option]:
    """
    Parse a numeric environment variable into an option, if it is set.

    Returns:
        Iterable[Option]: A single option, or nothing if the variable is unset.

    Raises:
        ValueError: If the variable is set but is not a number.
    """
    raw = env.get(name)
    if raw is None:
        return ()

    try:
        value = float(raw)
    except ValueError as error:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from error

    return (factory(value),)
