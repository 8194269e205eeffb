"""Structured log events for stats pipeline runs.

Events are emitted through femtologging as ``[event.type] key=value``
messages: INFO for progress, WARNING for skipped items, ERROR for failed
runs.

Usage
-----
>>> events = StatsEventLogger()
>>> events.log_run_started(username="octocat", period="03/2024")

"""

from __future__ import annotations

import enum
import typing as typ

from mergestats.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from mergestats.logging import get_logger, log_error, log_info, log_warning

from .errors import StatsValidationError

if typ.TYPE_CHECKING:
    import datetime as dt

    from .models import StatsSummary

logger = get_logger(__name__)


class StatsEventType(enum.StrEnum):
    """Structured log event types for stats runs."""

    RUN_STARTED = "stats.run.started"
    RUN_COMPLETED = "stats.run.completed"
    RUN_FAILED = "stats.run.failed"
    SEARCH_PAGE = "stats.search.page"
    SEARCH_ITEM_SKIPPED = "stats.search.item_skipped"
    ITEM_SKIPPED = "stats.item.skipped"


class ErrorCategory(enum.StrEnum):
    """Categories for classifying run failures."""

    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"
    SCHEMA_DRIFT = "schema_drift"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubRateLimitError, ErrorCategory.RATE_LIMITED),
    (GitHubAPIError, ErrorCategory.UPSTREAM),
    (GitHubTransportError, ErrorCategory.TRANSPORT),
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (StatsValidationError, ErrorCategory.VALIDATION),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception raised out of a stats run."""
    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category
    return ErrorCategory.UNKNOWN


class StatsEventLogger:
    """Emit structured stats pipeline events via femtologging."""

    def log_run_started(self, *, username: str, period: str) -> None:
        """Log the start of a stats run."""
        log_info(
            logger,
            "[%s] username=%s period=%s",
            StatsEventType.RUN_STARTED,
            username,
            period,
        )

    def log_search_page(self, *, page: int, items: int, accumulated: int) -> None:
        """Log one fetched search results page."""
        log_info(
            logger,
            "[%s] page=%d items=%d accumulated=%d",
            StatsEventType.SEARCH_PAGE,
            page,
            items,
            accumulated,
        )

    def log_search_item_skipped(self, *, page: int, reason: str) -> None:
        """Log a search result dropped for failing schema validation."""
        log_warning(
            logger,
            "[%s] page=%d reason=%s",
            StatsEventType.SEARCH_ITEM_SKIPPED,
            page,
            reason,
        )

    def log_item_skipped(self, *, number: int, repo: str | None, reason: str) -> None:
        """Log a pull request whose enrichment failed."""
        log_warning(
            logger,
            "[%s] number=%d repo=%s reason=%s",
            StatsEventType.ITEM_SKIPPED,
            number,
            repo,
            reason,
        )

    def log_run_completed(
        self,
        *,
        username: str,
        summary: StatsSummary,
        searched: int,
        duration: dt.timedelta,
    ) -> None:
        """Log a successful run with its headline counts."""
        log_info(
            logger,
            "[%s] username=%s duration_seconds=%.3f searched=%d total=%d "
            "merged=%d closed=%d open=%d repos=%d",
            StatsEventType.RUN_COMPLETED,
            username,
            duration.total_seconds(),
            searched,
            summary.total_prs,
            summary.merged_prs,
            summary.closed_prs,
            summary.open_prs,
            len(summary.repos),
        )

    def log_run_failed(
        self,
        *,
        username: str,
        error: BaseException,
        duration: dt.timedelta,
    ) -> None:
        """Log a failed run with its error category."""
        log_error(
            logger,
            "[%s] username=%s duration_seconds=%.3f error_type=%s "
            "error_category=%s error_message=%s",
            StatsEventType.RUN_FAILED,
            username,
            duration.total_seconds(),
            type(error).__name__,
            categorize_error(error),
            str(error),
        )
