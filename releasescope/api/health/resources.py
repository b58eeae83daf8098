"""Liveness and readiness probe resources.

Usage
-----
Register health endpoints on the Falcon app::

    from releasescope.api.health.resources import HealthResource, ReadyResource

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe reporting whether the dashboard service is wired.

    Without a dashboard service only the probes are served, so the process
    reports ``degraded`` with HTTP 503.
    """

    def __init__(self, *, dashboard_ready: bool = True) -> None:
        """Record whether domain endpoints are registered."""
        self._dashboard_ready = dashboard_ready

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests."""
        if self._dashboard_ready:
            resp.media = {"status": "ready"}
            resp.status = HTTPStatus.OK
            return
        resp.media = {"status": "degraded"}
        resp.status = HTTPStatus.SERVICE_UNAVAILABLE
