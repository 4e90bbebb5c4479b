from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Union


class Continuation(str, Enum):
    """
    Answer of a continuation predicate after a successful attempt.

    NO_OPINION is kept apart from STOP: both end the call with the result,
    but callers inspecting the answer can still tell them apart.
    """

    RETRY = "retry"
    STOP = "stop"
    NO_OPINION = "no_opinion"

    @classmethod
    def coerce(cls, value: ContinuationValue) -> Continuation:
        if isinstance(value, Continuation):
            return value
        if value is None:
            return cls.NO_OPINION
        if value is True:
            return cls.RETRY
        if value is False:
            return cls.STOP
        raise TypeError(f"continuation must be True, False, None or Continuation; got {type(value).__name__}")

    @property
    def should_retry(self) -> bool:
        return self is Continuation.RETRY


ContinuationValue = Union[Optional[bool], Continuation]
ContinuationPredicate = Callable[[], ContinuationValue]
