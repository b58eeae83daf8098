"""Dashboard API resources.

Routes
------
``GET /dashboard``
    Whole-dataset summary.
``GET /dashboard/repositories/{owner}/{name}``
    Summary of one repository.
``POST /dashboard/refresh``
    Drop every cache entry and rebuild the whole-dataset summary.

Summary responses carry ``{"data": {...}, "diagnostics": [...]}``; a
field group that failed to serialize is ``null`` in ``data`` and named in
``diagnostics``.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/dashboard", DashboardResource(service))
    app.add_route(
        "/dashboard/repositories/{owner}/{name}",
        RepositoryDashboardResource(service),
    )
    app.add_route("/dashboard/refresh", RefreshResource(service))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from releasescope.common.slug import repo_slug
from releasescope.dashboard.serialization import serialize_summary

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from releasescope.dashboard.service import DashboardService

__all__ = ["DashboardResource", "RefreshResource", "RepositoryDashboardResource"]


class DashboardResource:
    """Serve the whole-dataset summary."""

    def __init__(self, service: DashboardService) -> None:
        """Configure the resource with the dashboard service."""
        self._service = service

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /dashboard requests."""
        summary = await self._service.get_or_build_whole()
        resp.media = serialize_summary(summary).to_media()
        resp.status = HTTPStatus.OK


class RepositoryDashboardResource:
    """Serve the summary of one repository."""

    def __init__(self, service: DashboardService) -> None:
        """Configure the resource with the dashboard service."""
        self._service = service

    async def on_get(
        self,
        _req: Request,
        resp: Response,
        *,
        owner: str,
        name: str,
    ) -> None:
        """Handle GET /dashboard/repositories/{owner}/{name} requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response object.
        owner
            GitHub repository owner from URL path.
        name
            GitHub repository name from URL path.

        """
        summary = await self._service.get_or_build_for_repository(
            repo_slug(owner, name)
        )
        resp.media = serialize_summary(summary).to_media()
        resp.status = HTTPStatus.OK


class RefreshResource:
    """Force a rebuild of the whole-dataset summary."""

    def __init__(self, service: DashboardService) -> None:
        """Configure the resource with the dashboard service."""
        self._service = service

    async def on_post(self, _req: Request, resp: Response) -> None:
        """Handle POST /dashboard/refresh requests.

        Responds with the rebuilt totals rather than the whole summary.
        """
        summary = await self._service.refresh()
        resp.media = {
            "totalReleases": summary.total_releases,
            "repositories": [stats.name for stats in summary.repository_stats],
            "generatedAt": summary.generated_at,
        }
        resp.status = HTTPStatus.OK
