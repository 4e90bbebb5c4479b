"""
Retry runner: call an operation, call it again on failure or when a
continuation predicate asks for it, and re-raise the last failure untouched.

State machine (attempt starts at 1):
- operation raises -> terminal when max == 0 or attempt == max, else retry
- operation returns -> retry only if the predicate answers RETRY
- retry -> hook(attempt), attempt += 1
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

import deal

from retryrunner.config import DEFAULT_MAX_RETRIES_AFTER_FAILURE, RetryConfig, is_valid_max_retries
from retryrunner.continuation import Continuation, ContinuationPredicate
from retryrunner.hooks import BetweenAttemptsHook, Delay, is_valid_delay
from retryrunner.logging_config import log_kv

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_terminal_failure(attempt: int, max_retries_after_failure: int) -> bool:
    return max_retries_after_failure == 0 or attempt == max_retries_after_failure


@deal.pre(lambda operation, config=RetryConfig(): callable(operation), message="operation must be callable")
@deal.pre(lambda operation, config=RetryConfig(): isinstance(config, RetryConfig), message="config must be RetryConfig")
def execute(operation: Callable[[], T], config: RetryConfig = RetryConfig()) -> T:
    hook = config.effective_hook()
    attempt = 1

    while True:
        try:
            result = operation()
        except config.retry_on as e:
            if _is_terminal_failure(attempt, config.max_retries_after_failure):
                log_kv(logger, "retry exhausted", level=logging.DEBUG, attempt=attempt, error=type(e).__name__)
                raise
            log_kv(logger, "retry after failure", level=logging.DEBUG, attempt=attempt, error=type(e).__name__)
        else:
            if config.continuation is None:
                return result
            if not Continuation.coerce(config.continuation()).should_retry:
                return result
            log_kv(logger, "retry on continuation", level=logging.DEBUG, attempt=attempt)

        hook(attempt)
        attempt += 1


@deal.pre(
    lambda operation, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None, between_attempts=None: callable(operation),
    message="operation must be callable",
)
@deal.pre(
    lambda operation, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None, between_attempts=None: is_valid_max_retries(max_retries_after_failure),
    message="max_retries_after_failure must be int >= 0",
)
def run_void(
    operation: Callable[[], object],
    max_retries_after_failure: int = DEFAULT_MAX_RETRIES_AFTER_FAILURE,
    continuation: Optional[ContinuationPredicate] = None,
    between_attempts: Optional[BetweenAttemptsHook] = None,
) -> None:
    """Run `operation` for its side effects; re-raises the last failure unchanged."""
    execute(
        operation,
        RetryConfig(
            max_retries_after_failure=max_retries_after_failure,
            continuation=continuation,
            between_attempts=between_attempts,
        ),
    )


@deal.pre(
    lambda operation, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None, between_attempts=None: callable(operation),
    message="operation must be callable",
)
@deal.pre(
    lambda operation, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None, between_attempts=None: is_valid_max_retries(max_retries_after_failure),
    message="max_retries_after_failure must be int >= 0",
)
def run_with_result(
    operation: Callable[[], T],
    max_retries_after_failure: int = DEFAULT_MAX_RETRIES_AFTER_FAILURE,
    continuation: Optional[ContinuationPredicate] = None,
    between_attempts: Optional[BetweenAttemptsHook] = None,
) -> T:
    """Run `operation` and return the value of the last attempt."""
    return execute(
        operation,
        RetryConfig(
            max_retries_after_failure=max_retries_after_failure,
            continuation=continuation,
            between_attempts=between_attempts,
        ),
    )


@deal.pre(
    lambda operation, delay, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None: callable(operation),
    message="operation must be callable",
)
@deal.pre(
    lambda operation, delay, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None: is_valid_delay(delay),
    message="delay must be seconds >= 0 or a non-negative timedelta",
)
@deal.pre(
    lambda operation, delay, max_retries_after_failure=DEFAULT_MAX_RETRIES_AFTER_FAILURE, continuation=None: is_valid_max_retries(max_retries_after_failure),
    message="max_retries_after_failure must be int >= 0",
)
def run(
    operation: Callable[[], T],
    delay: Delay,
    max_retries_after_failure: int = DEFAULT_MAX_RETRIES_AFTER_FAILURE,
    continuation: Optional[ContinuationPredicate] = None,
) -> T:
    """Same as run_with_result, sleeping `delay` (seconds or timedelta) before every retry."""
    return execute(
        operation,
        RetryConfig(
            max_retries_after_failure=max_retries_after_failure,
            continuation=continuation,
            delay_s=delay,  # type: ignore[arg-type]
        ),
    )


class RetryRunner:
    """Stateless entry points. Every call keeps its own attempt counter."""

    execute = staticmethod(execute)
    run_void = staticmethod(run_void)
    run_with_result = staticmethod(run_with_result)
    run = staticmethod(run)
