"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest
import pytest_asyncio

from mergestats.stats import StatsConfig, StatsService, StatsServiceOptions
from tests.helpers.github_fixtures import FakeGitHub, make_client

if typ.TYPE_CHECKING:
    from mergestats.github import GitHubRESTClient

FIXED_NOW = dt.datetime(2024, 6, 15, 12, 0, tzinfo=dt.UTC)


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Return an empty GitHub fake; tests add pages and details."""
    return FakeGitHub()


@pytest.fixture
def stats_config() -> StatsConfig:
    """Return a pipeline configuration without pacing delays."""
    return StatsConfig(pacing_interval_s=0)


@pytest_asyncio.fixture
async def github_client(
    fake_github: FakeGitHub,
) -> typ.AsyncIterator[GitHubRESTClient]:
    """Yield a REST client backed by ``fake_github``."""
    client, http_client = make_client(fake_github)
    try:
        yield client
    finally:
        await http_client.aclose()


@pytest.fixture
def stats_service(
    github_client: GitHubRESTClient, stats_config: StatsConfig
) -> StatsService:
    """Return a stats service with a frozen clock in June 2024."""
    return StatsService(
        github_client,
        StatsServiceOptions(config=stats_config, clock=lambda: FIXED_NOW),
    )
