from __future__ import annotations

import functools
from typing import Any, Callable, Optional, TypeVar

import deal

from retryrunner.config import RetryConfig
from retryrunner.runner import execute

T = TypeVar("T")


@deal.pre(lambda config=None, **overrides: config is None or isinstance(config, RetryConfig), message="config must be RetryConfig or None")
def retrying(config: Optional[RetryConfig] = None, **overrides: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator form of execute().

        @retrying(max_retries_after_failure=5, delay_s=0.2)
        def fetch(url): ...

    Each call of the wrapped function is an independent retry run with the
    call's own arguments. The applied config is exposed as `retry_config`.
    """
    base = config if config is not None else RetryConfig()
    applied = base.with_overrides(**overrides) if overrides else base

    def decorator(fn: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return execute(lambda: fn(*args, **kwargs), applied)

        wrapper.retry_config = applied  # type: ignore[attr-defined]
        return wrapper

    return decorator
