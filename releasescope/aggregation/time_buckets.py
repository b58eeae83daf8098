"""Bucket release publication times by calendar unit.

Timestamps are converted to a configured local timezone before any
calendar field is derived. Week keys use the ISO-8601 week-numbering year,
so ``2024-12-30`` lands in ``2025-W01`` and ``2021-01-03`` in ``2020-W53``.

Usage
-----
>>> import datetime as dt
>>> buckets = bucket_release_times(
...     [dt.datetime(2024, 12, 30, 10, tzinfo=dt.UTC)],
...     day_policy=DayPolicy.WEEKDAYS_ONLY,
... )
>>> buckets.weekly
{'2025-W01': 1}

"""

from __future__ import annotations

import collections
import dataclasses as dc
import datetime as dt
import enum
import math
import typing as typ

from .models import BusinessHoursSplit, TimeBuckets, WeekendSplit

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import ReleaseEvent

BUSINESS_HOURS_START = 9
BUSINESS_HOURS_END = 18
HOURS_PER_DAY = 24

_SUNDAY = 0
_SATURDAY = 6


class DayPolicy(enum.StrEnum):
    """Which days feed the quarterly, hourly and business-hours counters."""

    ALL_DAYS = "all"
    WEEKDAYS_ONLY = "weekdays"


def iso_week(date: dt.date) -> tuple[int, int]:
    """Return ``(week_numbering_year, week)`` for ``date`` per ISO-8601.

    The date is moved to the Thursday of its Monday-based week; that
    Thursday's year owns the week, and the week number counts seven-day
    blocks from January 1st of that year.
    """
    iso_day = date.isoweekday()
    thursday = date + dt.timedelta(days=4 - iso_day)
    days_since_new_year = (thursday - dt.date(thursday.year, 1, 1)).days
    return thursday.year, math.ceil((days_since_new_year + 1) / 7)


@dc.dataclass(frozen=True, slots=True)
class TimeFields:
    """Calendar fields of one publication instant in local time."""

    year: int
    month: int
    day: int
    hour: int
    day_of_week: int
    iso_year: int
    iso_week: int

    @classmethod
    def from_timestamp(cls, value: dt.datetime, tz: dt.tzinfo) -> TimeFields:
        """Derive calendar fields for ``value`` as seen in ``tz``."""
        local = value.astimezone(tz)
        week_year, week = iso_week(local.date())
        return cls(
            year=local.year,
            month=local.month,
            day=local.day,
            hour=local.hour,
            day_of_week=local.isoweekday() % 7,
            iso_year=week_year,
            iso_week=week,
        )

    @property
    def quarter(self) -> int:
        """Return the calendar quarter, 1 to 4."""
        return math.ceil(self.month / 3)

    @property
    def is_weekend(self) -> bool:
        """Return whether the instant falls on Saturday or Sunday."""
        return self.day_of_week in (_SUNDAY, _SATURDAY)

    @property
    def is_business_hour(self) -> bool:
        """Return whether the local hour lies in 9-18 inclusive."""
        return BUSINESS_HOURS_START <= self.hour <= BUSINESS_HOURS_END

    @property
    def year_key(self) -> str:
        """Return the ``YYYY`` bucket key."""
        return f"{self.year:04d}"

    @property
    def quarter_key(self) -> str:
        """Return the ``YYYY-QN`` bucket key."""
        return f"{self.year:04d}-Q{self.quarter}"

    @property
    def month_key(self) -> str:
        """Return the ``YYYY-MM`` bucket key."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def week_key(self) -> str:
        """Return the ``YYYY-WNN`` bucket key in the ISO week-numbering year."""
        return f"{self.iso_year:04d}-W{self.iso_week:02d}"

    @property
    def day_key(self) -> str:
        """Return the ``YYYY-MM-DD`` bucket key."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def _sorted_counts(
    counter: collections.Counter[str],
    *,
    numeric: bool = False,
) -> dict[str, int]:
    if numeric:
        return {key: counter[key] for key in sorted(counter, key=int)}
    return dict(sorted(counter.items()))


def bucket_release_times(
    timestamps: cabc.Iterable[dt.datetime | None],
    *,
    tz: dt.tzinfo = dt.UTC,
    day_policy: DayPolicy = DayPolicy.ALL_DAYS,
) -> TimeBuckets:
    """Count publication timestamps per time unit.

    Parameters
    ----------
    timestamps
        Publication instants; ``None`` entries (unpublished releases) are
        skipped entirely.
    tz
        Timezone whose calendar defines every bucket.
    day_policy
        ``WEEKDAYS_ONLY`` keeps weekend releases out of the quarterly,
        hourly and business-hours counters. Every other counter sees all
        published releases.

    Returns
    -------
    TimeBuckets
        Sparse counters; units without releases have no key.

    """
    yearly: collections.Counter[str] = collections.Counter()
    quarterly: collections.Counter[str] = collections.Counter()
    monthly: collections.Counter[str] = collections.Counter()
    weekly: collections.Counter[str] = collections.Counter()
    daily: collections.Counter[str] = collections.Counter()
    hourly: collections.Counter[str] = collections.Counter()
    by_day_of_week: collections.Counter[str] = collections.Counter()
    weekend = weekday = business_hours = other = 0

    for timestamp in timestamps:
        if timestamp is None:
            continue
        fields = TimeFields.from_timestamp(timestamp, tz)

        yearly[fields.year_key] += 1
        monthly[fields.month_key] += 1
        weekly[fields.week_key] += 1
        daily[fields.day_key] += 1
        by_day_of_week[str(fields.day_of_week)] += 1
        if fields.is_weekend:
            weekend += 1
        else:
            weekday += 1

        if day_policy is DayPolicy.WEEKDAYS_ONLY and fields.is_weekend:
            continue
        quarterly[fields.quarter_key] += 1
        hourly[str(fields.hour)] += 1
        if fields.is_business_hour:
            business_hours += 1
        else:
            other += 1

    return TimeBuckets(
        yearly=_sorted_counts(yearly),
        quarterly=_sorted_counts(quarterly),
        monthly=_sorted_counts(monthly),
        weekly=_sorted_counts(weekly),
        daily=_sorted_counts(daily),
        hourly=_sorted_counts(hourly, numeric=True),
        by_day_of_week=_sorted_counts(by_day_of_week, numeric=True),
        weekend_vs_weekday=WeekendSplit(weekend=weekend, weekday=weekday),
        business_hours_vs_other=BusinessHoursSplit(
            business_hours=business_hours, other=other
        ),
    )


def bucket_releases(
    events: cabc.Iterable[ReleaseEvent],
    *,
    tz: dt.tzinfo = dt.UTC,
    day_policy: DayPolicy = DayPolicy.ALL_DAYS,
) -> TimeBuckets:
    """Bucket the publication times of ``events``."""
    return bucket_release_times(
        (event.published_at for event in events), tz=tz, day_policy=day_policy
    )


def dense_hourly(hourly: cabc.Mapping[str, int]) -> list[int]:
    """Expand a sparse hourly map into 24 slots, missing hours as zero."""
    return [hourly.get(str(hour), 0) for hour in range(HOURS_PER_DAY)]
