"""Dashboard orchestration: cached summaries over the release source."""

from __future__ import annotations

from .config import DashboardConfig, DashboardConfigError, load_repositories_file
from .errors import (
    DashboardError,
    EmptyDatasetError,
    RepositoryReleasesNotFoundError,
    UpstreamFetchError,
)
from .observability import DashboardEventLogger, DashboardEventType
from .serialization import SerializedSummary, serialize_summary
from .service import DashboardService

__all__ = [
    "DashboardConfig",
    "DashboardConfigError",
    "DashboardError",
    "DashboardEventLogger",
    "DashboardEventType",
    "DashboardService",
    "EmptyDatasetError",
    "RepositoryReleasesNotFoundError",
    "SerializedSummary",
    "UpstreamFetchError",
    "load_repositories_file",
    "serialize_summary",
]
