"""Pure aggregators turning release events into dashboard statistics.

Each ``summarize_*`` function reads an immutable collection of
``ReleaseEvent`` records and returns a frozen summary struct; none of them
performs I/O or keeps state between calls.

Public API
----------
bucket_releases
    Year/quarter/month/ISO-week/day/hour counters and day splits.
summarize_versions
    Release-type and version-type distributions.
summarize_authors
    Distinct authors, top authors and the bot/human split.
summarize_assets
    Attached-file totals and top content types.
summarize_branches
    Releases per target branch with percentage shares.
summarize_repositories
    Per-repository totals.
summarize_content
    Release-note length and coverage.
"""

from __future__ import annotations

from .assets import summarize_assets
from .authors import summarize_authors
from .branches import summarize_branches
from .content import published_date_range, summarize_content
from .models import DashboardSummary
from .repositories import summarize_repositories
from .time_buckets import (
    DayPolicy,
    bucket_release_times,
    bucket_releases,
    dense_hourly,
    iso_week,
)
from .versions import (
    ReleaseType,
    VersionType,
    classify_release_type,
    classify_version_type,
    summarize_versions,
)

__all__ = [
    "DashboardSummary",
    "DayPolicy",
    "ReleaseType",
    "VersionType",
    "bucket_release_times",
    "bucket_releases",
    "classify_release_type",
    "classify_version_type",
    "dense_hourly",
    "iso_week",
    "published_date_range",
    "summarize_assets",
    "summarize_authors",
    "summarize_branches",
    "summarize_content",
    "summarize_repositories",
    "summarize_versions",
]
