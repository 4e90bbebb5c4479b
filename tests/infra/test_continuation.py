from __future__ import annotations

import pytest

from retryrunner.continuation import Continuation


def test_coerce_tri_state() -> None:
    assert Continuation.coerce(True) is Continuation.RETRY
    assert Continuation.coerce(False) is Continuation.STOP
    assert Continuation.coerce(None) is Continuation.NO_OPINION


def test_coerce_passes_members_through() -> None:
    for member in Continuation:
        assert Continuation.coerce(member) is member


def test_no_opinion_is_distinct_from_stop() -> None:
    assert Continuation.NO_OPINION != Continuation.STOP
    assert Continuation.coerce(None) != Continuation.coerce(False)


def test_only_retry_retries() -> None:
    assert Continuation.RETRY.should_retry is True
    assert Continuation.STOP.should_retry is False
    assert Continuation.NO_OPINION.should_retry is False


@pytest.mark.parametrize("value", [1, 0, "retry", "", [], object()])
def test_coerce_rejects_other_values(value: object) -> None:
    with pytest.raises(TypeError):
        Continuation.coerce(value)  # type: ignore[arg-type]


def test_str_values() -> None:
    assert Continuation.RETRY.value == "retry"
    assert Continuation("no_opinion") is Continuation.NO_OPINION
