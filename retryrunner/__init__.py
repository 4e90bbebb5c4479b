# retryrunner/__init__.py
"""
RETRYRUNNER - run an operation again when it fails or when asked to.

Modules:
- runner: execute / run_void / run_with_result / run (fixed delay)
- config: RetryConfig
- continuation: tri-state answer of the continuation predicate
- hooks: between-attempts hooks (sleep, chain)
- decorators: @retrying
- outcome: Ok/Err form of a run
- settings: YAML/env loaded RetrySettings
"""

from __future__ import annotations

from .config import DEFAULT_MAX_RETRIES_AFTER_FAILURE, RetryConfig
from .continuation import Continuation
from .decorators import retrying
from .hooks import chain_hooks, noop_hook, sleep_hook
from .outcome import Err, Ok, attempt_result
from .runner import RetryRunner, execute, run, run_void, run_with_result

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_MAX_RETRIES_AFTER_FAILURE",
    "RetryConfig",
    "Continuation",
    "retrying",
    "chain_hooks",
    "noop_hook",
    "sleep_hook",
    "Ok",
    "Err",
    "attempt_result",
    "RetryRunner",
    "execute",
    "run",
    "run_void",
    "run_with_result",
]
