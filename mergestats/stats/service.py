"""Compose search, enrichment and aggregation into one stats run.

Usage
-----
>>> import asyncio
>>> from mergestats.github import GitHubRESTClient, GitHubRESTConfig
>>> client = GitHubRESTClient(GitHubRESTConfig.from_env())
>>> service = StatsService(client)
>>> # result = asyncio.run(service.compute_stats("octocat", 2024, 3))

Each call owns its own collections; nothing is shared between concurrent
runs except the GitHub quota behind ``client``, which is not coordinated
across runs.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from mergestats.common.time import utcnow

from .aggregator import summarize
from .config import StatsConfig
from .enricher import DetailEnricher
from .models import StatsResult, StatsSummary
from .observability import StatsEventLogger
from .paginator import SearchPaginator
from .request import build_request

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from mergestats.github.client import GitHubPullRequestClient

    from .models import EnrichedItem
    from .request import StatsRequest

__all__ = ["StatsService", "StatsServiceOptions"]


@dc.dataclass(frozen=True, slots=True)
class StatsServiceOptions:
    """Optional collaborators for :class:`StatsService`.

    Attributes
    ----------
    config
        Pipeline configuration; defaults to :class:`StatsConfig`.
    event_logger
        Structured event sink; defaults to :class:`StatsEventLogger`.
    clock
        Returns the current aware time, used for the latest valid year and
        run durations.

    """

    config: StatsConfig = dc.field(default_factory=StatsConfig)
    event_logger: StatsEventLogger = dc.field(default_factory=StatsEventLogger)
    clock: cabc.Callable[[], dt.datetime] = utcnow


class StatsService:
    """Compute monthly pull request statistics for a GitHub user."""

    def __init__(
        self,
        client: GitHubPullRequestClient,
        options: StatsServiceOptions | None = None,
    ) -> None:
        """Wire the pipeline stages to ``client``."""
        opts = options or StatsServiceOptions()
        self._events = opts.event_logger
        self._clock = opts.clock
        self._paginator = SearchPaginator(client, event_logger=self._events)
        self._enricher = DetailEnricher(
            client, config=opts.config, event_logger=self._events
        )

    async def compute_stats(
        self, username: str, year: int | str, month: int | str
    ) -> StatsResult:
        """Return pull request statistics for ``username`` in one month.

        Parameters
        ----------
        username
            GitHub login of the pull request author.
        year
            Calendar year, 2000 to the current year.
        month
            Calendar month, 1 to 12.

        Returns
        -------
        StatsResult
            Summary counts plus the enriched pull requests. A month without
            pull requests yields an all-zero summary and no items.

        Raises
        ------
        StatsValidationError
            If the input is malformed; raised before any GitHub call.
        GitHubRateLimitError
            If GitHub reports an exhausted quota at any stage.
        GitHubAPIError
            If the search endpoint answers with an error.
        GitHubResponseShapeError
            If a search page does not match the expected schema.
        GitHubTransportError
            If a search request fails before GitHub answers.

        """
        request = build_request(username, year, month, today=self._clock().date())
        return await self._run(request)

    async def _run(self, request: StatsRequest) -> StatsResult:
        period = request.period
        self._events.log_run_started(username=request.username, period=period.label)
        started_at = self._clock()
        try:
            raw_items = await self._paginator.fetch(
                request.username, period.start, period.end
            )
            if not raw_items:
                summary = StatsSummary.empty()
                items: tuple[EnrichedItem, ...] = ()
            else:
                items = tuple(await self._enricher.enrich(raw_items))
                summary = summarize(items)
        except Exception as exc:
            self._events.log_run_failed(
                username=request.username,
                error=exc,
                duration=self._clock() - started_at,
            )
            raise

        self._events.log_run_completed(
            username=request.username,
            summary=summary,
            searched=len(raw_items),
            duration=self._clock() - started_at,
        )
        return StatsResult(
            username=request.username,
            period=period.label,
            stats=summary,
            items=items,
        )
