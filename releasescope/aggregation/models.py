"""Summary records produced by the release aggregators.

Every record is a frozen ``msgspec.Struct`` so a built ``DashboardSummary``
cannot be mutated once cached, and the same structs double as the JSON
codec for the durable cache and the HTTP API. Wire names are camelCase to
match the dashboard client (``totalReleases``, ``releasesByType``, ...).
"""

from __future__ import annotations

import msgspec

from releasescope.github.models import AuthorType  # noqa: TC001


class ReleaseTypeCounts(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Release state split; the three counts sum to the release total."""

    stable: int = 0
    prerelease: int = 0
    draft: int = 0


class VersionTypeCounts(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Version shape split; the five counts sum to the release total."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: int = 0
    custom: int = 0


class WeekendSplit(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Published releases on Saturday/Sunday versus Monday-Friday."""

    weekend: int = 0
    weekday: int = 0


class BusinessHoursSplit(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Published releases inside 09:00-18:59 local time versus outside."""

    business_hours: int = 0
    other: int = 0


class TimeBuckets(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Sparse release counters keyed by formatted time unit.

    Attributes
    ----------
    yearly
        ``"YYYY"`` keys.
    quarterly
        ``"YYYY-QN"`` keys.
    monthly
        ``"YYYY-MM"`` keys.
    weekly
        ``"YYYY-WNN"`` keys using the ISO week-numbering year.
    daily
        ``"YYYY-MM-DD"`` keys.
    hourly
        Hour of day (``"0"`` to ``"23"``).
    by_day_of_week
        Day of week, ``"0"`` for Sunday to ``"6"`` for Saturday.
    weekend_vs_weekday
        Weekend/weekday split over every published release.
    business_hours_vs_other
        Business-hours split over the releases admitted by the day policy.

    """

    yearly: dict[str, int] = msgspec.field(default_factory=dict)
    quarterly: dict[str, int] = msgspec.field(default_factory=dict)
    monthly: dict[str, int] = msgspec.field(default_factory=dict)
    weekly: dict[str, int] = msgspec.field(default_factory=dict)
    daily: dict[str, int] = msgspec.field(default_factory=dict)
    hourly: dict[str, int] = msgspec.field(default_factory=dict)
    by_day_of_week: dict[str, int] = msgspec.field(default_factory=dict)
    weekend_vs_weekday: WeekendSplit = msgspec.field(default_factory=WeekendSplit)
    business_hours_vs_other: BusinessHoursSplit = msgspec.field(
        default_factory=BusinessHoursSplit
    )


class AuthorSummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """One ranked release author."""

    login: str
    release_count: int
    type: AuthorType
    repository_count: int


class BotHumanSplit(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Distinct authors classified as bots versus humans."""

    bots: int = 0
    humans: int = 0


class AuthorStats(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Author breakdown of a release collection."""

    total_authors: int = 0
    top_authors: tuple[AuthorSummary, ...] = ()
    bot_vs_human_ratio: BotHumanSplit = msgspec.field(default_factory=BotHumanSplit)


class ChangeTypeDistribution(
    msgspec.Struct, kw_only=True, frozen=True, rename="camel"
):
    """Release-note change categories.

    Release notes are not analysed, so every count stays zero.
    """

    breaking: int = 0
    features: int = 0
    bugfixes: int = 0
    performance: int = 0
    security: int = 0


class ContentStats(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Release-note statistics."""

    average_release_note_length: float = 0.0
    release_note_coverage: float = 0.0
    change_type_distribution: ChangeTypeDistribution = msgspec.field(
        default_factory=ChangeTypeDistribution
    )


class FileTypeSummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Attached files of one content type."""

    content_type: str = msgspec.field(name="type")
    count: int
    total_downloads: int
    total_size: int


class AssetStats(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Attached-file statistics."""

    total_assets: int = 0
    total_downloads: int = 0
    total_size: int = 0
    average_assets_per_release: int = 0
    popular_file_types: tuple[FileTypeSummary, ...] = ()


class BranchSummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Releases cut from one target branch."""

    branch: str
    release_count: int
    percentage: int


class BranchStats(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Target-branch statistics."""

    total_branches: int = 0
    top_branches: tuple[BranchSummary, ...] = ()


class RepositorySummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Per-repository release totals."""

    name: str
    total_releases: int
    stable_releases: int
    prereleases: int
    drafts: int
    total_downloads: int
    author_count: int
    latest_release: str | None = None


class DateRange(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Earliest and latest publish timestamps; empty when nothing is published."""

    earliest: str = ""
    latest: str = ""


class DashboardSummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Statistical summary of a release collection.

    Built once per cache miss and replaced, never mutated, on the next
    rebuild.
    """

    total_releases: int
    date_range: DateRange
    releases_by_type: ReleaseTypeCounts
    version_type_distribution: VersionTypeCounts
    releases_by_time_unit: TimeBuckets
    author_stats: AuthorStats
    content_stats: ContentStats
    asset_stats: AssetStats
    branch_stats: BranchStats
    repository_stats: tuple[RepositorySummary, ...] = ()
    generated_at: str = ""


__all__ = [
    "AssetStats",
    "AuthorStats",
    "AuthorSummary",
    "BotHumanSplit",
    "BranchStats",
    "BranchSummary",
    "BusinessHoursSplit",
    "ChangeTypeDistribution",
    "ContentStats",
    "DashboardSummary",
    "DateRange",
    "FileTypeSummary",
    "ReleaseTypeCounts",
    "RepositorySummary",
    "TimeBuckets",
    "VersionTypeCounts",
    "WeekendSplit",
]
