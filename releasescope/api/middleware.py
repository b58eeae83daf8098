"""ASGI lifespan middleware for the dashboard application.

Restores durable cache records before the first request is served and
closes the GitHub HTTP client on shutdown.

Usage
-----
Register the middleware when creating the Falcon app::

    lifecycle = DashboardLifecycle(store, release_client=client)
    app = falcon.asgi.App(middleware=[lifecycle])

"""

from __future__ import annotations

import typing as typ

from releasescope.cache.durable import FileCacheStore
from releasescope.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from releasescope.cache.store import CacheStore
    from releasescope.github.client import GitHubReleaseClient

__all__ = ["DashboardLifecycle"]

logger = get_logger(__name__)


class DashboardLifecycle:
    """Falcon middleware hooking cache and client lifetimes to the app.

    Parameters
    ----------
    store
        Cache store; a ``FileCacheStore`` is loaded at startup.
    release_client
        GitHub client closed at shutdown, if the app owns one.

    """

    def __init__(
        self,
        store: CacheStore,
        *,
        release_client: GitHubReleaseClient | None = None,
    ) -> None:
        """Initialize the middleware with the resources it manages."""
        self._store = store
        self._release_client = release_client

    async def process_startup(self, _scope: object, _event: object) -> None:
        """Restore durable cache records."""
        if isinstance(self._store, FileCacheStore):
            await self._store.load()
        log_info(logger, "releasescope dashboard ready")

    async def process_shutdown(self, _scope: object, _event: object) -> None:
        """Close the GitHub HTTP client."""
        if self._release_client is not None:
            await self._release_client.aclose()
        log_info(logger, "releasescope dashboard stopped")
