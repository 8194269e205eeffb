"""Common time utilities."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def from_epoch_seconds(value: int) -> dt.datetime:
    """Convert a Unix epoch timestamp into an aware UTC datetime."""
    return dt.datetime.fromtimestamp(value, tz=dt.UTC)
