"""GitHub REST client, schemas and rate-limit primitives."""

from __future__ import annotations

from .client import (
    GitHubPullRequestClient,
    GitHubResponse,
    GitHubRESTClient,
    GitHubRESTConfig,
    api_error,
)
from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from .models import PullRequestDetail, RawResultItem, SearchPage
from .ratelimit import (
    RateLimitSnapshot,
    RateLimitState,
    RateLimitStatus,
    inspect_rate_limit,
)

__all__ = [
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubError",
    "GitHubPullRequestClient",
    "GitHubRESTClient",
    "GitHubRESTConfig",
    "GitHubRateLimitError",
    "GitHubResponse",
    "GitHubResponseShapeError",
    "GitHubTransportError",
    "PullRequestDetail",
    "RateLimitSnapshot",
    "RateLimitState",
    "RateLimitStatus",
    "RawResultItem",
    "SearchPage",
    "api_error",
    "inspect_rate_limit",
]
