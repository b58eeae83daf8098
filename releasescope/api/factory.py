"""Build the dashboard service and its collaborators from the environment.

Usage
-----
Build the application dependencies for the runtime::

    from releasescope.api.factory import build_app_dependencies

    deps = build_app_dependencies()

"""

from __future__ import annotations

from releasescope.api.app import AppDependencies
from releasescope.cache.config import CacheConfig, build_cache_store
from releasescope.dashboard.config import DashboardConfig
from releasescope.dashboard.observability import DashboardEventLogger
from releasescope.dashboard.service import DashboardService
from releasescope.github.client import (
    GitHubReleaseClient,
    GitHubReleaseConfig,
    GitHubReleaseSource,
)

__all__ = ["build_app_dependencies", "build_dashboard_service"]


def build_dashboard_service(
    client: GitHubReleaseClient,
    *,
    dashboard_config: DashboardConfig | None = None,
    cache_config: CacheConfig | None = None,
) -> DashboardService:
    """Assemble a ``DashboardService`` fetching through ``client``.

    Parameters
    ----------
    client
        GitHub client used by the release source.
    dashboard_config
        Dashboard settings; read from the environment when omitted.
    cache_config
        Cache settings; read from the environment when omitted.

    Returns
    -------
    DashboardService
        Service over the configured repositories and cache backend.

    """
    dashboard_config = dashboard_config or DashboardConfig.from_env()
    cache_config = cache_config or CacheConfig.from_env()
    source = GitHubReleaseSource(client, dashboard_config.repositories)
    return DashboardService(
        source,
        build_cache_store(cache_config),
        dashboard_config,
        event_logger=DashboardEventLogger(),
    )


def build_app_dependencies() -> AppDependencies:
    """Build ``AppDependencies`` from ``RELEASESCOPE_*`` variables."""
    client = GitHubReleaseClient(GitHubReleaseConfig.from_env())
    service = build_dashboard_service(client)
    return AppDependencies(dashboard_service=service, release_client=client)
