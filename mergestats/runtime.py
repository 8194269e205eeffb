"""MergeStats runtime entrypoint.

This module provides the ASGI application factory used by the server and
delegates to :func:`mergestats.api.app.create_app` for construction.

When ``MERGESTATS_GITHUB_TOKEN`` is set, the runtime builds a GitHub client
and stats service so ``POST /api/stats`` is available. Otherwise it starts
in health-only mode.

Configuration is driven by environment variables:

- ``MERGESTATS_HOST``: Bind address (default ``0.0.0.0``)
- ``MERGESTATS_PORT``: Listen port (default ``3000``)
- ``MERGESTATS_LOG_LEVEL``: Log level (default ``INFO``)
- ``MERGESTATS_GITHUB_TOKEN``: GitHub token (enables the stats endpoint)
- ``MERGESTATS_GITHUB_API_URL``: GitHub API base URL override
- ``MERGESTATS_PACING_INTERVAL_S``: Pause after each detail lookup

Run the service directly with ``python -m mergestats.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from mergestats.github.errors import GitHubConfigError
from mergestats.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

    from mergestats.github.client import GitHubRESTClient

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


class GitHubClientLifecycle:
    """ASGI lifespan middleware closing the shared GitHub client on shutdown."""

    def __init__(self, client: GitHubRESTClient) -> None:
        """Hold the client to close at shutdown."""
        self._client = client

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Close the GitHub client's connection pool."""
        await self._client.aclose()


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid MERGESTATS_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from environment configuration.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application; health-only when no GitHub
        token is configured.

    """
    from mergestats.api.app import AppDependencies
    from mergestats.api.app import create_app as _create_api_app
    from mergestats.github.client import GitHubRESTClient, GitHubRESTConfig
    from mergestats.stats.config import StatsConfig
    from mergestats.stats.service import StatsService, StatsServiceOptions

    try:
        github_config = GitHubRESTConfig.from_env()
    except GitHubConfigError as exc:
        log_warning(logger, "Stats endpoint disabled: %s", exc)
        return _create_api_app()

    client = GitHubRESTClient(github_config)
    service = StatsService(client, StatsServiceOptions(config=StatsConfig.from_env()))
    app = _create_api_app(AppDependencies(stats_service=service))
    app.add_middleware(GitHubClientLifecycle(client))
    return app


def main() -> None:
    """Start the MergeStats server using Granian.

    Reads ``MERGESTATS_HOST``, ``MERGESTATS_PORT``, and
    ``MERGESTATS_LOG_LEVEL`` from the environment and starts the ASGI server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("MERGESTATS_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("MERGESTATS_PORT", "3000"))
    log_level_str = os.environ.get("MERGESTATS_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid MERGESTATS_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting MergeStats on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "mergestats.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
