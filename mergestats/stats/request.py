"""Validated stats requests and the calendar month they cover."""

from __future__ import annotations

import calendar
import dataclasses as dc
import datetime as dt
import re

from .errors import StatsValidationError

MIN_YEAR = 2000

# GitHub logins: 1-39 alphanumerics or single hyphens, no leading/trailing hyphen.
_USERNAME_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}")


@dc.dataclass(frozen=True, slots=True)
class StatsPeriod:
    """One calendar month, expressed as an inclusive date range."""

    year: int
    month: int

    @property
    def start(self) -> dt.date:
        """First day of the month."""
        return dt.date(self.year, self.month, 1)

    @property
    def end(self) -> dt.date:
        """Last day of the month."""
        last_day = calendar.monthrange(self.year, self.month)[1]
        return dt.date(self.year, self.month, last_day)

    @property
    def label(self) -> str:
        """Period label in ``MM/YYYY`` form."""
        return f"{self.month:02d}/{self.year}"


@dc.dataclass(frozen=True, slots=True)
class StatsRequest:
    """A validated request for one user's monthly pull request stats."""

    username: str
    period: StatsPeriod


def _coerce_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdecimal():
            return int(text)
    return None


def build_request(
    username: object,
    year: object,
    month: object,
    *,
    today: dt.date,
) -> StatsRequest:
    """Validate raw request values into a :class:`StatsRequest`.

    ``year`` and ``month`` may be integers or decimal strings. ``today``
    bounds the latest accepted year.

    Raises
    ------
    StatsValidationError
        If the username is not a GitHub login, the month is outside 1-12 or
        the year is outside 2000 to the current year.

    """
    if not isinstance(username, str) or not _USERNAME_PATTERN.fullmatch(username):
        raise StatsValidationError.invalid_username(str(username))

    month_value = _coerce_int(month)
    if month_value is None or not 1 <= month_value <= 12:  # noqa: PLR2004
        raise StatsValidationError.invalid_month(month)

    year_value = _coerce_int(year)
    if year_value is None or not MIN_YEAR <= year_value <= today.year:
        raise StatsValidationError.invalid_year(year, today.year)

    return StatsRequest(
        username=username,
        period=StatsPeriod(year=year_value, month=month_value),
    )
