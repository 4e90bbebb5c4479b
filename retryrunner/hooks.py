"""Between-attempts hooks. A hook receives the number of the attempt that just completed."""

from __future__ import annotations

import math
import time
from datetime import timedelta
from typing import Callable, Optional, Union

import deal

BetweenAttemptsHook = Callable[[int], None]
Delay = Union[int, float, timedelta]


def is_valid_delay(delay: object) -> bool:
    if isinstance(delay, bool):
        return False
    if isinstance(delay, timedelta):
        return delay >= timedelta(0)
    if isinstance(delay, (int, float)):
        return not math.isnan(delay) and delay >= 0
    return False


@deal.pre(lambda delay: is_valid_delay(delay), message="delay must be seconds >= 0 or a non-negative timedelta")
@deal.post(lambda result: result >= 0, message="to_seconds returns >= 0")
def to_seconds(delay: Delay) -> float:
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


def noop_hook(attempt: int) -> None:
    return None


@deal.pre(lambda delay: is_valid_delay(delay), message="delay must be seconds >= 0 or a non-negative timedelta")
def sleep_hook(delay: Delay) -> BetweenAttemptsHook:
    """Hook that blocks the calling thread for `delay` before the next attempt."""
    seconds = to_seconds(delay)
    if seconds == 0:
        return noop_hook

    def _sleep(attempt: int) -> None:
        time.sleep(seconds)

    return _sleep


@deal.pre(lambda *hooks: all(h is None or callable(h) for h in hooks), message="hooks must be callable or None")
def chain_hooks(*hooks: Optional[BetweenAttemptsHook]) -> BetweenAttemptsHook:
    """Run hooks in order; None entries are skipped, a raising hook stops the chain."""
    active = [h for h in hooks if h is not None and h is not noop_hook]
    if not active:
        return noop_hook
    if len(active) == 1:
        return active[0]

    def _chained(attempt: int) -> None:
        for h in active:
            h(attempt)

    return _chained
