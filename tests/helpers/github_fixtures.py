"""In-memory GitHub REST fake for stats pipeline tests.

``FakeGitHub`` answers the two endpoints MergeStats calls through an
``httpx.MockTransport`` and records every request it sees.
"""

from __future__ import annotations

import dataclasses
import re
import secrets
import typing as typ

import httpx

from mergestats.github import GitHubRESTClient, GitHubRESTConfig

TOKEN = secrets.token_hex(8)
BASE_URL = "https://github.example.test"
RESET_EPOCH = 1_710_000_000  # 2024-03-09T16:00:00Z

_PULL_PATH = re.compile(r"^/repos/(?P<repo>[^/]+/[^/]+)/pulls/(?P<number>\d+)$")


@dataclasses.dataclass(frozen=True, slots=True)
class FakeResponse:
    """Canned response served by :class:`FakeGitHub`."""

    payload: object
    status_code: int = 200
    remaining: int | None = 4999
    reset: int = RESET_EPOCH

    def to_httpx(self) -> httpx.Response:
        """Build the ``httpx.Response`` for this canned payload."""
        headers = {"x-ratelimit-limit": "5000", "x-ratelimit-reset": str(self.reset)}
        if self.remaining is not None:
            headers["x-ratelimit-remaining"] = str(self.remaining)
        return httpx.Response(
            status_code=self.status_code, json=self.payload, headers=headers
        )


def search_item(
    number: int,
    *,
    repo: str = "org/repoA",
    title: str | None = None,
    created_at: str = "2024-03-05T10:00:00Z",
) -> dict[str, typ.Any]:
    """Return an issue search result for pull request ``number``."""
    return {
        "title": title or f"PR {number}",
        "number": number,
        "state": "closed",
        "repository_url": f"{BASE_URL}/repos/{repo}",
        "html_url": f"https://github.example.test/{repo}/pull/{number}",
        "created_at": created_at,
        "pull_request": {"url": f"{BASE_URL}/repos/{repo}/pulls/{number}"},
    }


def search_page(items: list[typ.Any]) -> FakeResponse:
    """Return a search results page wrapping ``items``."""
    return FakeResponse(
        {"total_count": len(items), "incomplete_results": False, "items": items}
    )


def full_page(first_number: int) -> FakeResponse:
    """Return a full 100-item search page numbered from ``first_number``."""
    return search_page(
        [search_item(number) for number in range(first_number, first_number + 100)]
    )


def pull_detail(
    *,
    merged: bool,
    state: str = "closed",
    merged_at: str | None = None,
    closed_at: str | None = None,
) -> FakeResponse:
    """Return a pull request detail response."""
    if merged:
        merged_at = merged_at or "2024-03-06T12:00:00Z"
    if state == "closed":
        closed_at = closed_at or merged_at or "2024-03-07T09:30:00Z"
    return FakeResponse(
        {
            "number": 0,
            "merged": merged,
            "state": state,
            "merged_at": merged_at,
            "closed_at": closed_at,
        }
    )


def error_body(
    message: str, *, status_code: int = 404, remaining: int = 4999
) -> FakeResponse:
    """Return a GitHub error body carrying ``message``."""
    return FakeResponse(
        {"message": message, "documentation_url": "https://docs.github.com"},
        status_code=status_code,
        remaining=remaining,
    )


DetailReply = FakeResponse | Exception


@dataclasses.dataclass(slots=True)
class FakeGitHub:
    """Serve search pages by page number and details by ``(repo, number)``.

    Pages beyond ``search_pages`` are served empty. A detail reply may be an
    exception, which the transport raises instead of responding. Details
    without a reply default to an open pull request.
    """

    search_pages: list[FakeResponse] = dataclasses.field(default_factory=list)
    details: dict[tuple[str, int], DetailReply] = dataclasses.field(
        default_factory=dict
    )
    requests: list[httpx.Request] = dataclasses.field(default_factory=list)

    @property
    def search_requests(self) -> list[httpx.Request]:
        """Requests made to the search endpoint."""
        return [req for req in self.requests if req.url.path == "/search/issues"]

    @property
    def detail_requests(self) -> list[httpx.Request]:
        """Requests made to the pull request detail endpoint."""
        return [req for req in self.requests if _PULL_PATH.match(req.url.path)]

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Answer one request made through the mock transport."""
        self.requests.append(request)
        if request.url.path == "/search/issues":
            page = int(request.url.params["page"])
            if page <= len(self.search_pages):
                return self.search_pages[page - 1].to_httpx()
            return search_page([]).to_httpx()

        match = _PULL_PATH.match(request.url.path)
        if match is None:
            return httpx.Response(404, json={"message": "Not Found"})
        key = (match["repo"], int(match["number"]))
        reply = self.details.get(key, pull_detail(merged=False, state="open"))
        if isinstance(reply, Exception):
            raise reply
        return reply.to_httpx()


def make_client(fake: FakeGitHub) -> tuple[GitHubRESTClient, httpx.AsyncClient]:
    """Return a REST client wired to ``fake`` and the underlying HTTP client."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handle))
    client = GitHubRESTClient(
        GitHubRESTConfig(token=TOKEN, base_url=BASE_URL),
        http_client=http_client,
    )
    return client, http_client
