from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Type, Union

import deal

from retryrunner.continuation import ContinuationPredicate
from retryrunner.hooks import BetweenAttemptsHook, chain_hooks, is_valid_delay, sleep_hook, to_seconds

DEFAULT_MAX_RETRIES_AFTER_FAILURE = 3

RetryOn = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


def is_valid_max_retries(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_valid_retry_on(value: object) -> bool:
    if isinstance(value, type):
        return issubclass(value, BaseException)
    if isinstance(value, tuple) and value:
        return all(isinstance(t, type) and issubclass(t, BaseException) for t in value)
    return False


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """
    Knobs of one retry call.

    max_retries_after_failure: attempts allowed on the failure path. The first
        attempt is attempt 1 and a failure on attempt N is terminal, so the
        default of 3 gives at most 3 calls. 0 means a single call.
    continuation: asked after each successful call; True/Continuation.RETRY
        forces another call. Not bounded by max_retries_after_failure.
    between_attempts: called with the finished attempt number right before a
        retry. Never before the first call, never after the last.
    delay_s: fixed blocking pause before each retry, after between_attempts.
    retry_on: exception classes subject to the policy; others propagate at once.
    """

    max_retries_after_failure: int = DEFAULT_MAX_RETRIES_AFTER_FAILURE
    continuation: Optional[ContinuationPredicate] = None
    between_attempts: Optional[BetweenAttemptsHook] = None
    delay_s: float = 0.0
    retry_on: RetryOn = (Exception,)

    @deal.pre(lambda self: is_valid_max_retries(self.max_retries_after_failure), message="max_retries_after_failure must be int >= 0")
    @deal.pre(lambda self: self.continuation is None or callable(self.continuation), message="continuation must be callable or None")
    @deal.pre(lambda self: self.between_attempts is None or callable(self.between_attempts), message="between_attempts must be callable or None")
    @deal.pre(lambda self: is_valid_delay(self.delay_s), message="delay_s must be >= 0")
    @deal.pre(lambda self: is_valid_retry_on(self.retry_on), message="retry_on must be exception class(es)")
    def __post_init__(self) -> None:
        object.__setattr__(self, "delay_s", to_seconds(self.delay_s))
        if isinstance(self.retry_on, type):
            object.__setattr__(self, "retry_on", (self.retry_on,))

    def effective_hook(self) -> BetweenAttemptsHook:
        return chain_hooks(self.between_attempts, sleep_hook(self.delay_s))

    def with_overrides(self, **changes: Any) -> RetryConfig:
        return replace(self, **changes)
