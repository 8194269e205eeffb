"""Unit tests for StatsService."""

from __future__ import annotations

import typing as typ

import msgspec
import pytest

from mergestats.github import GitHubRateLimitError
from mergestats.stats import (
    RepositoryCounts,
    StatsService,
    StatsValidationError,
    encode_result,
)
from tests.helpers.github_fixtures import (
    FakeGitHub,
    FakeResponse,
    pull_detail,
    search_item,
    search_page,
)

if typ.TYPE_CHECKING:
    from mergestats.stats import StatsResult


def _seed_mixed_month(fake: FakeGitHub) -> None:
    fake.search_pages = [
        search_page(
            [
                search_item(1, repo="org/repoA"),
                search_item(2, repo="org/repoA"),
                search_item(3, repo="org/repoB"),
            ]
        )
    ]
    fake.details = {
        ("org/repoA", 1): pull_detail(merged=True),
        ("org/repoA", 2): pull_detail(merged=False, state="open"),
        ("org/repoB", 3): pull_detail(merged=False),
    }


@pytest.mark.asyncio
async def test_computes_summary_and_items(
    fake_github: FakeGitHub, stats_service: StatsService
) -> None:
    """A month with mixed outcomes is summarised per repository."""
    _seed_mixed_month(fake_github)

    result = await stats_service.compute_stats("octocat", 2024, 3)

    assert result.username == "octocat"
    assert result.period == "03/2024"
    assert result.stats.total_prs == 3
    assert result.stats.merged_prs == 1
    assert result.stats.closed_prs == 1
    assert result.stats.open_prs == 1
    assert result.stats.repos == {
        "org/repoA": RepositoryCounts(total=2, merged=1),
        "org/repoB": RepositoryCounts(total=1, merged=0),
    }
    assert [item.number for item in result.items] == [1, 2, 3]
    query = fake_github.search_requests[0].url.params["q"]
    assert query == "type:pr author:octocat created:2024-03-01..2024-03-31"


@pytest.mark.asyncio
async def test_empty_month_skips_enrichment(
    fake_github: FakeGitHub, stats_service: StatsService
) -> None:
    """No search results yields a zero summary without detail lookups."""
    result = await stats_service.compute_stats("octocat", 2024, 2)

    assert result.items == ()
    payload = msgspec.json.decode(encode_result(result))
    assert payload == {
        "username": "octocat",
        "period": "02/2024",
        "stats": {
            "totalPRs": 0,
            "mergedPRs": 0,
            "closedPRs": 0,
            "openPRs": 0,
            "repos": {},
        },
        "items": [],
    }
    assert fake_github.detail_requests == []


@pytest.mark.asyncio
async def test_invalid_input_fails_before_any_request(
    fake_github: FakeGitHub, stats_service: StatsService
) -> None:
    """Validation errors are raised without contacting GitHub."""
    with pytest.raises(StatsValidationError):
        await stats_service.compute_stats("octocat", 2024, 13)
    with pytest.raises(StatsValidationError):
        await stats_service.compute_stats("octocat", 2025, 1)

    assert fake_github.requests == []


@pytest.mark.asyncio
async def test_repeated_runs_encode_identically(
    fake_github: FakeGitHub, stats_service: StatsService
) -> None:
    """Unchanged upstream data yields byte-identical results."""
    _seed_mixed_month(fake_github)

    first: StatsResult = await stats_service.compute_stats("octocat", "2024", "3")
    second: StatsResult = await stats_service.compute_stats("octocat", 2024, 3)

    assert encode_result(first) == encode_result(second)


@pytest.mark.asyncio
async def test_rate_limit_during_enrichment_propagates(
    fake_github: FakeGitHub, stats_service: StatsService
) -> None:
    """An exhausted quota mid-run fails the whole run."""
    _seed_mixed_month(fake_github)
    fake_github.details[("org/repoA", 2)] = FakeResponse(
        pull_detail(merged=False, state="open").payload, remaining=0
    )

    with pytest.raises(GitHubRateLimitError):
        await stats_service.compute_stats("octocat", 2024, 3)

    assert len(fake_github.detail_requests) == 2
