"""Rate-limit inspection shared by every GitHub call site.

GitHub reports the caller's quota in ``x-ratelimit-*`` headers on each
response. :func:`inspect_rate_limit` turns those headers into a
:class:`RateLimitSnapshot` and classifies it; it never raises, so each
pipeline stage decides for itself whether an exhausted quota is fatal.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from mergestats.common.time import from_epoch_seconds

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

_REMAINING_HEADER = "x-ratelimit-remaining"
_LIMIT_HEADER = "x-ratelimit-limit"
_RESET_HEADER = "x-ratelimit-reset"


class RateLimitState(enum.StrEnum):
    """Classification of a rate-limit snapshot."""

    OK = "ok"
    EXHAUSTED = "exhausted"


@dataclasses.dataclass(frozen=True, slots=True)
class RateLimitSnapshot:
    """Quota figures read from a single GitHub response.

    Attributes
    ----------
    remaining
        Requests left in the current window, ``None`` if not reported.
    limit
        Size of the window's quota, ``None`` if not reported.
    reset_at
        When the window resets, ``None`` if not reported.

    """

    remaining: int | None
    limit: int | None
    reset_at: dt.datetime | None


@dataclasses.dataclass(frozen=True, slots=True)
class RateLimitStatus:
    """Tagged result of :func:`inspect_rate_limit`."""

    state: RateLimitState
    snapshot: RateLimitSnapshot

    @property
    def exhausted(self) -> bool:
        """Return ``True`` when no requests remain in the window."""
        return self.state is RateLimitState.EXHAUSTED


def _header_int(headers: cabc.Mapping[str, str], name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    text = raw.strip()
    if not (text.isascii() and text.isdecimal()):
        return None
    return int(text)


def _reset_time(epoch: int | None) -> dt.datetime | None:
    if epoch is None:
        return None
    try:
        return from_epoch_seconds(epoch)
    except (ValueError, OverflowError, OSError):
        # Outside the platform's representable range.
        return None


def read_snapshot(headers: cabc.Mapping[str, str]) -> RateLimitSnapshot:
    """Build a :class:`RateLimitSnapshot` from response headers.

    Malformed or missing header values are reported as ``None`` rather than
    raising.
    """
    return RateLimitSnapshot(
        remaining=_header_int(headers, _REMAINING_HEADER),
        limit=_header_int(headers, _LIMIT_HEADER),
        reset_at=_reset_time(_header_int(headers, _RESET_HEADER)),
    )


def inspect_rate_limit(headers: cabc.Mapping[str, str]) -> RateLimitStatus:
    """Read and classify the rate-limit headers of a GitHub response.

    Only an explicit ``remaining == 0`` counts as exhausted; a response
    without rate-limit headers is treated as within quota.
    """
    snapshot = read_snapshot(headers)
    state = (
        RateLimitState.EXHAUSTED if snapshot.remaining == 0 else RateLimitState.OK
    )
    return RateLimitStatus(state=state, snapshot=snapshot)


__all__ = [
    "RateLimitSnapshot",
    "RateLimitState",
    "RateLimitStatus",
    "inspect_rate_limit",
    "read_snapshot",
]
