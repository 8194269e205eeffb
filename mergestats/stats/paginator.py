"""Paginated pull request search for one author and date range."""

from __future__ import annotations

import typing as typ

import msgspec

from mergestats.github.client import api_error
from mergestats.github.errors import GitHubRateLimitError, GitHubResponseShapeError
from mergestats.github.models import parse_search_item, parse_search_page

from .observability import StatsEventLogger

if typ.TYPE_CHECKING:
    import datetime as dt

    from mergestats.github.client import GitHubPullRequestClient
    from mergestats.github.models import RawResultItem, SearchPage

SEARCH_PAGE_SIZE = 100
# GitHub search serves at most 1000 results: 10 pages of 100.
SEARCH_MAX_PAGES = 10


def build_search_query(username: str, start: dt.date, end: dt.date) -> str:
    """Return the search query for pull requests ``username`` opened in range.

    Both bounds are inclusive calendar dates.
    """
    return (
        f"type:pr author:{username} "
        f"created:{start.isoformat()}..{end.isoformat()}"
    )


class SearchPaginator:
    """Collect every search result for an author and date range.

    Pages are fetched one after another until a page comes back empty, a
    page comes back short, or :data:`SEARCH_MAX_PAGES` pages have been read.
    Results beyond GitHub's 1000-result ceiling are not reachable and are
    silently left out.
    """

    def __init__(
        self,
        client: GitHubPullRequestClient,
        *,
        event_logger: StatsEventLogger | None = None,
    ) -> None:
        """Configure the paginator with a GitHub client."""
        self._client = client
        self._events = event_logger or StatsEventLogger()

    async def fetch(
        self, username: str, start: dt.date, end: dt.date
    ) -> list[RawResultItem]:
        """Return all search results, in the order GitHub delivered them.

        Raises
        ------
        GitHubRateLimitError
            If any page reports an exhausted quota.
        GitHubAPIError
            If any page carries an API error.
        GitHubResponseShapeError
            If a page is not a search results envelope.
        GitHubTransportError
            If a request fails before GitHub answers.

        """
        query = build_search_query(username, start, end)
        accumulated: list[RawResultItem] = []
        page = 1

        while True:
            raw_items = await self._fetch_page(query, page)
            accumulated.extend(self._parse_items(raw_items, page=page))
            self._events.log_search_page(
                page=page, items=len(raw_items), accumulated=len(accumulated)
            )

            if not raw_items:
                break
            if len(raw_items) < SEARCH_PAGE_SIZE or page >= SEARCH_MAX_PAGES:
                break
            page += 1

        return accumulated

    async def _fetch_page(self, query: str, page: int) -> list[typ.Any]:
        response = await self._client.search_issues(
            query, page=page, per_page=SEARCH_PAGE_SIZE
        )
        if response.rate_limit.exhausted:
            raise GitHubRateLimitError.exhausted(response.rate_limit.snapshot.reset_at)

        payload = response.json()
        error = api_error(response, payload)
        if error is not None:
            raise error

        search_page = _parse_page(payload)
        return search_page.items

    def _parse_items(
        self, raw_items: list[typ.Any], *, page: int
    ) -> list[RawResultItem]:
        items: list[RawResultItem] = []
        for raw_item in raw_items:
            try:
                items.append(parse_search_item(raw_item))
            except msgspec.ValidationError as exc:
                self._events.log_search_item_skipped(page=page, reason=str(exc))
        return items


def _parse_page(payload: object) -> SearchPage:
    try:
        return parse_search_page(payload)
    except msgspec.ValidationError as exc:
        raise GitHubResponseShapeError.mismatch("search page", str(exc)) from exc
