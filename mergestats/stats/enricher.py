"""Per pull request detail lookups for authoritative merge state.

The search endpoint does not say whether a closed pull request was merged,
so each search result is looked up individually. Lookups run strictly one
at a time, with a fixed pause after each success, to stay within the
caller's shared GitHub quota.
"""

from __future__ import annotations

import asyncio
import typing as typ

import msgspec

from mergestats.github.client import api_error
from mergestats.github.errors import (
    GitHubRateLimitError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from mergestats.github.models import parse_pull_request_detail

from .config import StatsConfig
from .models import EnrichedItem
from .observability import StatsEventLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from mergestats.github.client import GitHubPullRequestClient
    from mergestats.github.models import PullRequestDetail, RawResultItem

_REPOS_MARKER = "/repos/"


def repository_from_url(repository_url: str) -> str | None:
    """Return ``owner/name`` from a GitHub API repository URL.

    Only the text after the first ``/repos/`` marker is considered, and it
    must be exactly two non-empty path segments. Anything else yields
    ``None``.

    >>> repository_from_url("https://api.github.com/repos/octo/reef")
    'octo/reef'
    >>> repository_from_url("https://api.github.com/repos/octo/reef/pulls") is None
    True

    """
    _, marker, tail = repository_url.partition(_REPOS_MARKER)
    if not marker:
        return None
    segments = tail.split("/")
    if len(segments) != 2 or not all(segments):  # noqa: PLR2004
        return None
    return "/".join(segments)


class _ItemSkippedError(Exception):
    """Internal signal that one item cannot be enriched."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class DetailEnricher:
    """Turn search results into :class:`EnrichedItem` records.

    A failed lookup for one item is logged and the item dropped. An
    exhausted rate limit aborts the whole pass and discards anything
    already enriched.
    """

    def __init__(
        self,
        client: GitHubPullRequestClient,
        *,
        config: StatsConfig | None = None,
        event_logger: StatsEventLogger | None = None,
    ) -> None:
        """Configure the enricher with a GitHub client and pacing policy."""
        self._client = client
        self._config = config or StatsConfig()
        self._events = event_logger or StatsEventLogger()

    async def enrich(
        self, items: cabc.Sequence[RawResultItem]
    ) -> list[EnrichedItem]:
        """Enrich ``items`` in order, skipping those whose lookup fails.

        Raises
        ------
        GitHubRateLimitError
            If any lookup reports an exhausted quota.

        """
        enriched: list[EnrichedItem] = []
        for item in items:
            repo = repository_from_url(item.repository_url)
            if repo is None:
                self._events.log_item_skipped(
                    number=item.number,
                    repo=None,
                    reason=f"unrecognised repository_url {item.repository_url!r}",
                )
                continue

            try:
                detail = await self._lookup(repo, item.number)
            except _ItemSkippedError as exc:
                self._events.log_item_skipped(
                    number=item.number, repo=repo, reason=exc.reason
                )
                continue

            enriched.append(_build_item(item, repo, detail))
            await self._pace()

        return enriched

    async def _lookup(self, repo: str, number: int) -> PullRequestDetail:
        try:
            response = await self._client.get_pull_request(repo, number)
        except GitHubTransportError as exc:
            raise _ItemSkippedError(str(exc)) from exc

        if response.rate_limit.exhausted:
            raise GitHubRateLimitError.exhausted(response.rate_limit.snapshot.reset_at)

        try:
            payload = response.json()
        except GitHubResponseShapeError as exc:
            raise _ItemSkippedError(str(exc)) from exc

        error = api_error(response, payload)
        if error is not None:
            raise _ItemSkippedError(str(error))

        try:
            return parse_pull_request_detail(payload)
        except msgspec.ValidationError as exc:
            reason = str(GitHubResponseShapeError.mismatch("pull request", str(exc)))
            raise _ItemSkippedError(reason) from exc

    async def _pace(self) -> None:
        if self._config.pacing_interval_s > 0:
            await asyncio.sleep(self._config.pacing_interval_s)


def _build_item(
    item: RawResultItem, repo: str, detail: PullRequestDetail
) -> EnrichedItem:
    return EnrichedItem(
        title=item.title,
        number=item.number,
        repo=repo,
        merged=detail.merged,
        state=detail.state,
        created_at=item.created_at,
        merged_at=detail.merged_at,
        closed_at=detail.closed_at,
        url=item.html_url,
    )
