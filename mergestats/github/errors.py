"""GitHub API errors raised by the MergeStats client and pipeline."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import datetime as dt


class GitHubError(RuntimeError):
    """Base class for all GitHub-facing failures."""


class GitHubRateLimitError(GitHubError):
    """Raised when GitHub reports an exhausted rate-limit quota.

    Attributes
    ----------
    reset_at
        When the quota resets, or ``None`` when GitHub did not say.

    """

    def __init__(self, message: str, *, reset_at: dt.datetime | None) -> None:
        """Initialise with a message and the quota reset time."""
        self.reset_at = reset_at
        super().__init__(message)

    @property
    def reset_display(self) -> str:
        """Return the reset time formatted for people, e.g. ``14:05:00 UTC``."""
        return _format_reset(self.reset_at)

    @classmethod
    def exhausted(cls, reset_at: dt.datetime | None) -> GitHubRateLimitError:
        """Return an error for a response reporting zero remaining requests."""
        return cls(
            "GitHub API rate limit exceeded. "
            f"Try again after {_format_reset(reset_at)}",
            reset_at=reset_at,
        )


def _format_reset(reset_at: dt.datetime | None) -> str:
    if reset_at is None:
        return "an unknown time"
    return reset_at.strftime("%H:%M:%S UTC")


class GitHubAPIError(GitHubError):
    """Raised when GitHub understood a request but answered with an error."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        upstream_message: str | None = None,
    ) -> None:
        """Initialise with a message, HTTP status and GitHub's own message."""
        self.status_code = status_code
        self.upstream_message = upstream_message
        super().__init__(message)

    @classmethod
    def from_message(
        cls, upstream_message: str, *, status_code: int | None = None
    ) -> GitHubAPIError:
        """Return an error wrapping the ``message`` field of an error body."""
        return cls(
            f"GitHub API error: {upstream_message}",
            status_code=status_code,
            upstream_message=upstream_message,
        )

    @classmethod
    def http_error(cls, status_code: int) -> GitHubAPIError:
        """Return an error for a non-2xx response without an error body."""
        return cls(f"GitHub API HTTP {status_code}", status_code=status_code)


class GitHubTransportError(GitHubError):
    """Raised when a request to GitHub never produced a response."""

    @classmethod
    def timeout(cls, url: str) -> GitHubTransportError:
        """Return an error for a request that timed out."""
        return cls(f"GitHub API request timed out: {url}")

    @classmethod
    def network_error(cls, url: str, detail: str) -> GitHubTransportError:
        """Return an error for connection-level failures."""
        return cls(f"GitHub API request failed: {url}: {detail}")


class GitHubResponseShapeError(GitHubError):
    """Raised when a GitHub response does not match the expected schema."""

    @classmethod
    def invalid_json(cls, url: str) -> GitHubResponseShapeError:
        """Return an error for a body that is not valid JSON."""
        return cls(f"GitHub API returned invalid JSON: {url}")

    @classmethod
    def mismatch(cls, shape: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a body that fails schema validation."""
        return cls(f"GitHub {shape} response does not match schema: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("MERGESTATS_GITHUB_TOKEN is required for GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")
