"""GitHub REST client for pull request search and detail lookups."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

import httpx
import msgspec

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from .ratelimit import RateLimitStatus, inspect_rate_limit


class GitHubPullRequestClient(typ.Protocol):
    """Interface the stats pipeline needs from a GitHub client."""

    async def search_issues(
        self, query: str, *, page: int, per_page: int
    ) -> GitHubResponse:
        """Fetch one page of issue search results for ``query``."""
        ...

    async def get_pull_request(self, repo: str, number: int) -> GitHubResponse:
        """Fetch the detail record of pull request ``number`` in ``repo``."""
        ...


_HTTP_ERROR_STATUS_THRESHOLD = 400
_API_VERSION = "2022-11-28"
_DEFAULT_BASE_URL = "https://api.github.com"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRESTConfig:
    """Configuration for the GitHub REST API client."""

    token: str
    base_url: str = _DEFAULT_BASE_URL
    timeout_s: float = 20.0
    user_agent: str = "mergestats/0.1"

    @classmethod
    def from_env(cls) -> GitHubRESTConfig:
        """Build configuration using the ``MERGESTATS_GITHUB_TOKEN`` env var."""
        raw_token = os.environ.get("MERGESTATS_GITHUB_TOKEN")
        if raw_token is None:
            raise GitHubConfigError.missing_token()
        token = raw_token.strip()
        if not token:
            raise GitHubConfigError.empty_token()
        base_url = os.environ.get("MERGESTATS_GITHUB_API_URL", _DEFAULT_BASE_URL)
        return cls(token=token, base_url=base_url.rstrip("/"))


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubResponse:
    """An undecoded GitHub response with its rate-limit classification."""

    url: str
    status_code: int
    content: bytes
    rate_limit: RateLimitStatus

    def json(self) -> object:
        """Decode the body, raising on anything that is not JSON."""
        try:
            return msgspec.json.decode(self.content)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.invalid_json(self.url) from exc


def api_error(response: GitHubResponse, payload: object) -> GitHubAPIError | None:
    """Return the API-level error a decoded body reports, if any.

    GitHub signals request-level failures with a JSON object carrying a
    ``message`` field; an error status without such a body is reported by
    status code alone.
    """
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return GitHubAPIError.from_message(
                message, status_code=response.status_code
            )
    if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
        return GitHubAPIError.http_error(response.status_code)
    return None


class GitHubRESTClient:
    """Thin async wrapper over the two GitHub REST endpoints MergeStats uses.

    The client never inspects payloads or rate limits beyond packaging them
    into :class:`GitHubResponse`; pipeline stages apply their own policies.
    """

    def __init__(
        self,
        config: GitHubRESTConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "User-Agent": config.user_agent,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def search_issues(
        self, query: str, *, page: int, per_page: int
    ) -> GitHubResponse:
        """Fetch one page of issue search results for ``query``."""
        return await self._get(
            "/search/issues",
            params={"q": query, "per_page": per_page, "page": page},
        )

    async def get_pull_request(self, repo: str, number: int) -> GitHubResponse:
        """Fetch the detail record of pull request ``number`` in ``repo``."""
        return await self._get(f"/repos/{repo}/pulls/{number}")

    async def _get(
        self,
        path: str,
        *,
        params: dict[str, typ.Any] | None = None,
    ) -> GitHubResponse:
        url = f"{self._config.base_url}{path}"
        try:
            response = await self._client.get(
                url, params=params, headers=self._headers
            )
        except httpx.TimeoutException as exc:
            raise GitHubTransportError.timeout(url) from exc
        except httpx.RequestError as exc:
            raise GitHubTransportError.network_error(url, str(exc)) from exc

        return GitHubResponse(
            url=url,
            status_code=response.status_code,
            content=response.content,
            rate_limit=inspect_rate_limit(response.headers),
        )
