"""MergeStats HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that exposes the stats pipeline over HTTP.

Usage
-----
Create and run the application::

    from mergestats.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # full mode with the stats endpoint

"""

from mergestats.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
