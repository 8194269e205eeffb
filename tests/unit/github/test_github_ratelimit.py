"""Unit tests for rate-limit header inspection."""

from __future__ import annotations

import datetime as dt

import pytest

from mergestats.github.ratelimit import (
    RateLimitState,
    inspect_rate_limit,
    read_snapshot,
)

_RESET_EPOCH = 1_710_000_000


def test_read_snapshot_parses_all_headers() -> None:
    """All three x-ratelimit headers are read into the snapshot."""
    snapshot = read_snapshot(
        {
            "x-ratelimit-remaining": "42",
            "x-ratelimit-limit": "5000",
            "x-ratelimit-reset": str(_RESET_EPOCH),
        }
    )
    assert snapshot.remaining == 42
    assert snapshot.limit == 5000
    assert snapshot.reset_at == dt.datetime(2024, 3, 9, 16, 0, tzinfo=dt.UTC)


def test_read_snapshot_tolerates_missing_and_malformed_headers() -> None:
    """Missing or non-numeric header values become None."""
    snapshot = read_snapshot({"x-ratelimit-remaining": "lots"})
    assert snapshot.remaining is None
    assert snapshot.limit is None
    assert snapshot.reset_at is None


@pytest.mark.parametrize(
    ("headers", "expected"),
    [
        ({"x-ratelimit-remaining": "0"}, RateLimitState.EXHAUSTED),
        ({"x-ratelimit-remaining": "1"}, RateLimitState.OK),
        ({}, RateLimitState.OK),
    ],
)
def test_inspect_rate_limit_classifies_remaining_quota(
    headers: dict[str, str], expected: RateLimitState
) -> None:
    """Only an explicit zero remaining quota is classified as exhausted."""
    status = inspect_rate_limit(headers)
    assert status.state is expected
    assert status.exhausted is (expected is RateLimitState.EXHAUSTED)


def test_inspect_rate_limit_keeps_reset_time_when_exhausted() -> None:
    """The snapshot of an exhausted response still carries the reset time."""
    status = inspect_rate_limit(
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": str(_RESET_EPOCH)}
    )
    assert status.exhausted
    assert status.snapshot.reset_at is not None
    assert status.snapshot.reset_at.hour == 16


@pytest.mark.parametrize(
    "headers",
    [
        {"x-ratelimit-remaining": "10", "x-ratelimit-reset": "99999999999999"},
        {"x-ratelimit-remaining": "\u00b2", "x-ratelimit-reset": "\u00b2"},
        {"x-ratelimit-remaining": "\u0663", "x-ratelimit-limit": "\u0665"},
    ],
)
def test_unrepresentable_header_values_become_none(headers: dict[str, str]) -> None:
    """Out-of-range epochs and non-ASCII digits never raise."""
    status = inspect_rate_limit(headers)
    assert status.state is RateLimitState.OK
    assert status.snapshot.reset_at is None
    assert status.snapshot.limit is None
