from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from retryrunner.config import RetryConfig
from retryrunner.runner import execute

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    Successful end of a retry run.

    Holds the value returned by the last attempt.
    """
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """
    Failed end of a retry run.

    Holds the exact exception object that ended the run, so unwrap()
    raises the same instance a plain execute() would have raised.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Ok[T], Err[E]]


def attempt_result(operation: Callable[[], T], config: RetryConfig = RetryConfig()) -> Result[T, BaseException]:
    """Like execute(), but a failure in config.retry_on comes back as Err instead of raising."""
    try:
        return Ok(execute(operation, config))
    except config.retry_on as e:
        return Err(e)
