"""Falcon error handlers for stats pipeline failures.

The pipeline raises transport-agnostic exceptions; this module is the only
place they are mapped onto HTTP responses.

Usage
-----
Register every handler on a Falcon app::

    from mergestats.api.errors import register_error_handlers

    register_error_handlers(app)

"""

from __future__ import annotations

import typing as typ

import falcon

from mergestats.github.errors import (
    GitHubAPIError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from mergestats.stats.errors import StatsValidationError

if typ.TYPE_CHECKING:
    import falcon.asgi
    from falcon.asgi import Request, Response

__all__ = [
    "handle_rate_limited",
    "handle_response_shape",
    "handle_transport_error",
    "handle_upstream_error",
    "handle_validation_error",
    "register_error_handlers",
]


async def handle_validation_error(
    _req: Request,
    resp: Response,
    ex: StatsValidationError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``StatsValidationError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    resp.media = {
        "title": "Invalid input",
        "description": ex.reason,
        "field": ex.field,
    }


async def handle_rate_limited(
    _req: Request,
    resp: Response,
    ex: GitHubRateLimitError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GitHubRateLimitError`` to an HTTP 429 JSON response.

    When the reset time is known it is also sent as ``Retry-After`` in
    HTTP-date form.
    """
    resp.status = falcon.HTTP_429
    resp.media = {
        "title": "GitHub rate limit exceeded",
        "description": str(ex),
        "reset_at": None if ex.reset_at is None else ex.reset_at.isoformat(),
    }
    if ex.reset_at is not None:
        resp.set_header("Retry-After", falcon.dt_to_http(ex.reset_at))


async def handle_upstream_error(
    _req: Request,
    resp: Response,
    ex: GitHubAPIError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GitHubAPIError`` to an HTTP 502 JSON response."""
    resp.status = falcon.HTTP_502
    resp.media = {"title": "GitHub API error", "description": str(ex)}


async def handle_transport_error(
    _req: Request,
    resp: Response,
    ex: GitHubTransportError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GitHubTransportError`` to an HTTP 504 JSON response."""
    resp.status = falcon.HTTP_504
    resp.media = {"title": "GitHub unreachable", "description": str(ex)}


async def handle_response_shape(
    _req: Request,
    resp: Response,
    ex: GitHubResponseShapeError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GitHubResponseShapeError`` to an HTTP 502 JSON response."""
    resp.status = falcon.HTTP_502
    resp.media = {"title": "Unexpected GitHub response", "description": str(ex)}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Register every stats error handler on ``app``."""
    app.add_error_handler(StatsValidationError, handle_validation_error)
    app.add_error_handler(GitHubRateLimitError, handle_rate_limited)
    app.add_error_handler(GitHubAPIError, handle_upstream_error)
    app.add_error_handler(GitHubTransportError, handle_transport_error)
    app.add_error_handler(GitHubResponseShapeError, handle_response_shape)
