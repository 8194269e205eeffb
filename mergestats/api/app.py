"""Application factory for the MergeStats Falcon ASGI application.

Usage
-----
Create a health-only app (no GitHub access)::

    app = create_app()

Create a full app with the stats endpoint::

    from mergestats.api.app import AppDependencies, create_app

    app = create_app(AppDependencies(stats_service=stats_service))

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from mergestats.api.errors import register_error_handlers
from mergestats.api.health.resources import HealthResource, ReadyResource
from mergestats.api.stats.resources import RootResource, StatsResource

if typ.TYPE_CHECKING:
    from mergestats.stats.service import StatsService

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    stats_service
        Service backing ``POST /api/stats``. When ``None`` the endpoint is
        not registered.

    """

    stats_service: StatsService | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    ``/``, ``/health`` and ``/ready`` are always registered;
    ``POST /api/stats`` only when *dependencies* supplies a stats service.
    Cross-origin requests are allowed so browser front ends can call the
    API directly.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    app = falcon.asgi.App(cors_enable=True)

    app.add_route("/", RootResource())
    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if dependencies is not None and dependencies.stats_service is not None:
        app.add_route("/api/stats", StatsResource(dependencies.stats_service))

    register_error_handlers(app)
    return app
