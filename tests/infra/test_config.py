from __future__ import annotations

import dataclasses
import time
from datetime import timedelta
from typing import List

import deal
import pytest

from retryrunner.config import DEFAULT_MAX_RETRIES_AFTER_FAILURE, RetryConfig
from retryrunner.hooks import noop_hook


def test_defaults() -> None:
    cfg = RetryConfig()
    assert cfg.max_retries_after_failure == DEFAULT_MAX_RETRIES_AFTER_FAILURE == 3
    assert cfg.continuation is None
    assert cfg.between_attempts is None
    assert cfg.delay_s == 0.0
    assert cfg.retry_on == (Exception,)
    assert cfg.effective_hook() is noop_hook


def test_frozen() -> None:
    cfg = RetryConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.max_retries_after_failure = 5  # type: ignore[misc]


def test_timedelta_delay_is_normalized() -> None:
    cfg = RetryConfig(delay_s=timedelta(milliseconds=250))  # type: ignore[arg-type]
    assert cfg.delay_s == 0.25


def test_single_exception_class_becomes_tuple() -> None:
    cfg = RetryConfig(retry_on=ValueError)
    assert cfg.retry_on == (ValueError,)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_retries_after_failure": -1},
        {"max_retries_after_failure": False},
        {"continuation": "nope"},
        {"between_attempts": 3},
        {"delay_s": -0.1},
        {"retry_on": ()},
        {"retry_on": (int,)},
        {"retry_on": "Exception"},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(deal.PreContractError):
        RetryConfig(**kwargs)


def test_with_overrides_returns_copy() -> None:
    base = RetryConfig()
    other = base.with_overrides(max_retries_after_failure=7)
    assert base.max_retries_after_failure == 3
    assert other.max_retries_after_failure == 7


def test_effective_hook_runs_explicit_hook_then_sleeps(monkeypatch: pytest.MonkeyPatch) -> None:
    events: List[str] = []
    monkeypatch.setattr(time, "sleep", lambda s: events.append(f"sleep {s}"))

    cfg = RetryConfig(between_attempts=lambda a: events.append(f"hook {a}"), delay_s=2)
    cfg.effective_hook()(1)

    assert events == ["hook 1", "sleep 2.0"]


def test_effective_hook_is_explicit_hook_without_delay() -> None:
    calls: List[int] = []
    cfg = RetryConfig(between_attempts=calls.append)
    cfg.effective_hook()(4)
    assert calls == [4]
