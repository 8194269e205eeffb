"""Result structures produced by the stats pipeline."""

from __future__ import annotations

import datetime as dt  # noqa: TC003

import msgspec

from mergestats.github.models import PullRequestState  # noqa: TC001


class EnrichedItem(msgspec.Struct, kw_only=True, frozen=True):
    """A pull request with its authoritative merge state.

    Attributes
    ----------
    title
        Pull request title, from the search result.
    number
        Pull request number within its repository.
    repo
        Owning repository as ``owner/name``.
    merged
        Whether the pull request was merged. Implies ``state == "closed"``.
    state
        ``open`` or ``closed``, from the detail lookup.
    created_at
        Creation time, from the search result.
    merged_at
        Merge time, ``None`` unless merged.
    closed_at
        Close time, ``None`` while open.
    url
        Browser URL of the pull request.

    """

    title: str
    number: int
    repo: str
    merged: bool
    state: PullRequestState
    created_at: dt.datetime
    merged_at: dt.datetime | None
    closed_at: dt.datetime | None
    url: str


class RepositoryCounts(msgspec.Struct, kw_only=True, frozen=True):
    """Pull request counters for one repository."""

    total: int
    merged: int


class StatsSummary(
    msgspec.Struct,
    kw_only=True,
    frozen=True,
    rename={
        "total_prs": "totalPRs",
        "merged_prs": "mergedPRs",
        "closed_prs": "closedPRs",
        "open_prs": "openPRs",
    },
):
    """Rollup counts over a collection of enriched pull requests.

    ``closed_prs`` counts pull requests closed without being merged, so
    ``merged_prs + closed_prs + open_prs == total_prs``.
    """

    total_prs: int
    merged_prs: int
    closed_prs: int
    open_prs: int
    repos: dict[str, RepositoryCounts]

    @classmethod
    def empty(cls) -> StatsSummary:
        """Return the summary of a period without pull requests."""
        return cls(total_prs=0, merged_prs=0, closed_prs=0, open_prs=0, repos={})


class StatsResult(msgspec.Struct, kw_only=True, frozen=True):
    """Response of :meth:`mergestats.stats.service.StatsService.compute_stats`."""

    username: str
    period: str
    stats: StatsSummary
    items: tuple[EnrichedItem, ...]


def encode_result(result: StatsResult) -> bytes:
    """Encode a :class:`StatsResult` as JSON bytes.

    Encoding is deterministic: identical results always yield identical
    bytes.
    """
    return msgspec.json.encode(result)
