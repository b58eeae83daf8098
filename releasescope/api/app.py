"""Application factory for the releasescope Falcon ASGI application.

Usage
-----
Create a probes-only app::

    app = create_app()

Create a full app with dashboard and cache endpoints::

    from releasescope.api.app import AppDependencies, create_app

    deps = AppDependencies(dashboard_service=service)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from releasescope.api.errors import register_error_handlers
from releasescope.api.health.resources import HealthResource, ReadyResource

if typ.TYPE_CHECKING:
    from releasescope.dashboard.service import DashboardService
    from releasescope.github.client import GitHubReleaseClient

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    dashboard_service
        Orchestrator behind the dashboard and cache endpoints.
    release_client
        GitHub client owned by the app and closed on shutdown.

    """

    dashboard_service: DashboardService | None = None
    release_client: GitHubReleaseClient | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    When *dependencies* provides a dashboard service the app serves the
    dashboard and cache endpoints and restores durable cache records at
    startup. Otherwise only ``/health`` and ``/ready`` are registered and
    readiness reports ``degraded``.

    Parameters
    ----------
    dependencies
        Optional application dependencies.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    service = dependencies.dashboard_service if dependencies is not None else None
    middleware: list[object] = []

    if service is not None and dependencies is not None:
        from releasescope.api.middleware import DashboardLifecycle

        middleware.append(
            DashboardLifecycle(
                service.store, release_client=dependencies.release_client
            )
        )

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(dashboard_ready=service is not None))

    if service is not None:
        from releasescope.api.cache.resources import CacheEntryResource, CacheResource
        from releasescope.api.dashboard.resources import (
            DashboardResource,
            RefreshResource,
            RepositoryDashboardResource,
        )

        app.add_route("/dashboard", DashboardResource(service))
        app.add_route(
            "/dashboard/repositories/{owner}/{name}",
            RepositoryDashboardResource(service),
        )
        app.add_route("/dashboard/refresh", RefreshResource(service))
        app.add_route("/cache", CacheResource(service))
        app.add_route("/cache/{kind}", CacheEntryResource(service))

    register_error_handlers(app)

    return app
