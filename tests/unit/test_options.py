# unit/test_options.py

from datetime import timedelta

import pytest
from pydantic import ValidationError

from backoff_sequencer import (
    BackoffConfig,
    build_config,
    options_from_env,
    with_max,
    with_min,
    with_multiplier,
    with_terminate,
)

pytestmark = pytest.mark.unit


def test_build_config_without_options_returns_defaults() -> None:
    """
    ARRANGE: no options
    ACT:     build_config
    ASSERT:  equals the default BackoffConfig
    """
    actual = build_config()

    assert actual == BackoffConfig()


def test_with_min_overrides_min_delay() -> None:
    """
    ARRANGE: with_min of three seconds
    ACT:     build_config
    ASSERT:  min_delay is three seconds
    """
    actual = build_config(with_min(timedelta(seconds=3)))

    assert actual.min_delay == timedelta(seconds=3)


def test_with_max_accepts_plain_seconds() -> None:
    """
    ARRANGE: with_max given as a number
    ACT:     build_config
    ASSERT:  max_delay is the equivalent timedelta
    """
    actual = build_config(with_max(12))

    assert actual.max_delay == timedelta(seconds=12)


def test_with_multiplier_overrides_multiplier() -> None:
    """
    ARRANGE: with_multiplier of 5
    ACT:     build_config
    ASSERT:  multiplier is 5
    """
    actual = build_config(with_multiplier(5))

    assert actual.multiplier == 5.0


def test_options_last_write_wins() -> None:
    """
    ARRANGE: two with_min options for the same field
    ACT:     build_config
    ASSERT:  the later value is kept
    """
    actual = build_config(with_min(2), with_min(7))

    assert actual.min_delay == timedelta(seconds=7)


def test_with_terminate_defaults_to_enabled() -> None:
    """
    ARRANGE: with_terminate without argument
    ACT:     build_config
    ASSERT:  terminate is True
    """
    actual = build_config(with_terminate())

    assert actual.terminate is True


def test_with_terminate_false_disables_earlier_enable() -> None:
    """
    ARRANGE: with_terminate(True) followed by with_terminate(False)
    ACT:     build_config
    ASSERT:  terminate is False
    """
    actual = build_config(with_terminate(True), with_terminate(False))

    assert actual.terminate is False


def test_option_does_not_mutate_input_config() -> None:
    """
    ARRANGE: default config and a with_multiplier option
    ACT:     apply the option
    ASSERT:  original config still has the default multiplier
    """
    original = BackoffConfig()

    with_multiplier(10)(original)

    assert original.multiplier == 2.0


def test_option_with_invalid_type_raises_when_applied() -> None:
    """
    ARRANGE: with_multiplier given a non-numeric string
    ACT:     build_config
    ASSERT:  raises ValidationError
    """
    with pytest.raises(ValidationError):
        build_config(with_multiplier("fast"))


def test_options_from_env_returns_empty_when_unset() -> None:
    """
    ARRANGE: environment without backoff variables
    ACT:     options_from_env
    ASSERT:  returns no options
    """
    actual = options_from_env(environ={"PATH": "/usr/bin"})

    assert actual == []


def test_options_from_env_reads_all_variables() -> None:
    """
    ARRANGE: environment with every backoff variable set
    ACT:     build_config from options_from_env
    ASSERT:  config reflects each variable
    """
    environ = {
        "BACKOFF_MIN_SECONDS": "0.5",
        "BACKOFF_MAX_SECONDS": "30",
        "BACKOFF_MULTIPLIER": "3",
        "BACKOFF_TERMINATE": "yes",
    }

    actual = build_config(*options_from_env(environ=environ))

    assert actual == BackoffConfig(
        min_delay=timedelta(milliseconds=500),
        max_delay=timedelta(seconds=30),
        multiplier=3.0,
        terminate=True,
    )


def test_options_from_env_treats_unknown_terminate_value_as_false() -> None:
    """
    ARRANGE: BACKOFF_TERMINATE set to a non-truthy word
    ACT:     build_config from options_from_env
    ASSERT:  terminate is False
    """
    actual = build_config(*options_from_env(environ={"BACKOFF_TERMINATE": "nope"}))

    assert actual.terminate is False


def test_options_from_env_honours_custom_prefix() -> None:
    """
    ARRANGE: variables under a custom prefix
    ACT:     options_from_env with that prefix
    ASSERT:  variables are picked up
    """
    environ = {"RECONNECT_MAX_SECONDS": "90"}

    actual = build_config(*options_from_env("RECONNECT_", environ=environ))

    assert actual.max_delay == timedelta(seconds=90)


def test_options_from_env_reads_process_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    ARRANGE: BACKOFF_MULTIPLIER set in os.environ
    ACT:     options_from_env without an explicit mapping
    ASSERT:  multiplier is read from the process environment
    """
    monkeypatch.setenv("BACKOFF_MULTIPLIER", "4")

    actual = build_config(*options_from_env())

    assert actual.multiplier == 4.0


def test_explicit_option_after_env_options_wins() -> None:
    """
    ARRANGE: env sets min to 5s, explicit option sets it to 2s afterwards
    ACT:     build_config
    ASSERT:  explicit value wins
    """
    env_options = options_from_env(environ={"BACKOFF_MIN_SECONDS": "5"})

    actual = build_config(*env_options, with_min(2))

    assert actual.min_delay == timedelta(seconds=2)


def test_options_from_env_rejects_malformed_number() -> None:
    """
    ARRANGE: BACKOFF_MAX_SECONDS that is not a number
    ACT:     options_from_env
    ASSERT:  raises ValueError naming the variable
    """
    with pytest.raises(ValueError, match="BACKOFF_MAX_SECONDS"):
        options_from_env(environ={"BACKOFF_MAX_SECONDS": "soon"})
