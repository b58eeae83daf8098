"""releasescope: release statistics for GitHub repositories.

Public API
----------
DashboardService
    Builds and caches ``DashboardSummary`` views over release events.
DashboardSummary
    Immutable statistical summary of a release collection.
ReleaseEvent
    One release record as fetched from GitHub.
"""

from __future__ import annotations

from releasescope.aggregation.models import DashboardSummary
from releasescope.dashboard.service import DashboardService
from releasescope.github.models import ReleaseEvent

__all__ = ["DashboardService", "DashboardSummary", "ReleaseEvent"]
