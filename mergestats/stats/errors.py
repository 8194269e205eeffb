"""Errors raised by the stats service before any GitHub call is made."""

from __future__ import annotations


class StatsValidationError(ValueError):
    """Raised when a stats request carries malformed input.

    Attributes
    ----------
    field
        Name of the offending input field.
    reason
        Human-readable description of the failure.

    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialise with the offending field and a reason."""
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")

    @classmethod
    def invalid_username(cls, username: str) -> StatsValidationError:
        """Return an error for a string that cannot be a GitHub login."""
        return cls("username", f"{username!r} is not a valid GitHub username")

    @classmethod
    def invalid_month(cls, month: object) -> StatsValidationError:
        """Return an error for a month outside 1-12."""
        return cls(
            "month",
            f"Invalid month {month!r}. Please enter a number between 1 and 12.",
        )

    @classmethod
    def invalid_year(cls, year: object, latest: int) -> StatsValidationError:
        """Return an error for a year outside the supported range."""
        return cls("year", f"Invalid year {year!r}. Expected 2000-{latest}.")
