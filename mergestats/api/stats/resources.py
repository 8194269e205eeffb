"""Stats API resources.

``POST /api/stats`` runs the stats pipeline for a JSON body of the form
``{"username": ..., "year": ..., "month": ...}`` and answers with the
encoded :class:`~mergestats.stats.models.StatsResult`.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/", RootResource())
    app.add_route("/api/stats", StatsResource(stats_service))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import falcon

from mergestats.stats.errors import StatsValidationError
from mergestats.stats.models import encode_result

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from mergestats.stats.service import StatsService

__all__ = ["RootResource", "StatsResource"]

_REQUIRED_FIELDS = ("username", "year", "month")


class RootResource:
    """Plain-text banner confirming the service is up."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET / requests."""
        resp.content_type = falcon.MEDIA_TEXT
        resp.text = "MergeStats API is running! Use /api/stats endpoint for data."
        resp.status = HTTPStatus.OK


class StatsResource:
    """Resource computing monthly pull request stats on demand."""

    def __init__(self, stats_service: StatsService) -> None:
        """Configure the resource with the stats service."""
        self._stats_service = stats_service

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /api/stats requests.

        Raises
        ------
        StatsValidationError
            If the body is not an object or lacks a required field; the
            service raises it for malformed values.

        """
        body = await req.get_media()
        if not isinstance(body, dict):
            raise StatsValidationError("body", "Expected a JSON object")
        for field in _REQUIRED_FIELDS:
            if body.get(field) in (None, ""):
                raise StatsValidationError(field, "Missing required parameter")

        result = await self._stats_service.compute_stats(
            body["username"], body["year"], body["month"]
        )
        resp.content_type = falcon.MEDIA_JSON
        resp.data = encode_result(result)
        resp.status = HTTPStatus.OK
