"""Cache status and invalidation resources.

Routes
------
``GET /cache``
    Valid keys and approximate size, ``{"keys": [...], "approxSizeBytes": n}``.
``DELETE /cache``
    Invalidate every entry.
``DELETE /cache/{kind}``
    Invalidate one entry; ``repository-dashboard`` requires the
    ``repository`` query parameter (``owner/name``).

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import msgspec

from releasescope.api.errors import InvalidInputError
from releasescope.cache.keys import CacheKind, parse_cache_kind

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from releasescope.dashboard.service import DashboardService

__all__ = ["CacheEntryResource", "CacheResource"]


class CacheResource:
    """Report on or clear the whole dashboard cache."""

    def __init__(self, service: DashboardService) -> None:
        """Configure the resource with the dashboard service."""
        self._service = service

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /cache requests."""
        status = await self._service.status()
        resp.media = msgspec.to_builtins(status)
        resp.status = HTTPStatus.OK

    async def on_delete(self, _req: Request, resp: Response) -> None:
        """Handle DELETE /cache requests."""
        await self._service.invalidate_all()
        resp.media = {"invalidated": "all"}
        resp.status = HTTPStatus.OK


class CacheEntryResource:
    """Invalidate a single cache entry."""

    def __init__(self, service: DashboardService) -> None:
        """Configure the resource with the dashboard service."""
        self._service = service

    async def on_delete(self, req: Request, resp: Response, *, kind: str) -> None:
        """Handle DELETE /cache/{kind} requests.

        Raises
        ------
        InvalidInputError
            If a repository-scoped kind arrives without ``repository``.

        """
        cache_kind = parse_cache_kind(kind)
        repository = req.get_param("repository")
        if cache_kind is CacheKind.REPOSITORY_DASHBOARD and not repository:
            raise InvalidInputError(
                "repository is required for repository-dashboard",
                field="repository",
            )
        key = await self._service.invalidate(cache_kind, repository)
        resp.media = {"invalidated": key}
        resp.status = HTTPStatus.OK
