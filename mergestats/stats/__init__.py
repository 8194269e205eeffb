"""Monthly pull request statistics pipeline.

Search results flow through :class:`SearchPaginator`, then
:class:`DetailEnricher`, then :func:`summarize`; :class:`StatsService`
composes the three behind :meth:`StatsService.compute_stats`.
"""

from __future__ import annotations

from .aggregator import summarize
from .config import StatsConfig
from .enricher import DetailEnricher, repository_from_url
from .errors import StatsValidationError
from .models import (
    EnrichedItem,
    RepositoryCounts,
    StatsResult,
    StatsSummary,
    encode_result,
)
from .observability import ErrorCategory, StatsEventLogger, categorize_error
from .paginator import SEARCH_MAX_PAGES, SEARCH_PAGE_SIZE, SearchPaginator
from .request import StatsPeriod, StatsRequest, build_request
from .service import StatsService, StatsServiceOptions

__all__ = [
    "SEARCH_MAX_PAGES",
    "SEARCH_PAGE_SIZE",
    "DetailEnricher",
    "EnrichedItem",
    "ErrorCategory",
    "RepositoryCounts",
    "SearchPaginator",
    "StatsConfig",
    "StatsEventLogger",
    "StatsPeriod",
    "StatsRequest",
    "StatsResult",
    "StatsService",
    "StatsServiceOptions",
    "StatsSummary",
    "StatsValidationError",
    "build_request",
    "categorize_error",
    "encode_result",
    "repository_from_url",
    "summarize",
]
