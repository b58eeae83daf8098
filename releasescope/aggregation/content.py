"""Release-note statistics and the publication date range."""

from __future__ import annotations

import typing as typ

from releasescope.common.time import isoformat_z

from .models import ContentStats, DateRange

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import ReleaseEvent


def summarize_content(events: cabc.Sequence[ReleaseEvent]) -> ContentStats:
    """Return mean note length and the share of releases with notes.

    A missing body counts as length zero; a body that is only whitespace
    does not count towards coverage. The change-type distribution is left
    at zero because release notes are not analysed.
    """
    if not events:
        return ContentStats()
    total = len(events)
    note_length = sum(len(event.body or "") for event in events)
    with_notes = sum(1 for event in events if event.body and event.body.strip())
    return ContentStats(
        average_release_note_length=note_length / total,
        release_note_coverage=with_notes / total,
    )


def published_date_range(events: cabc.Iterable[ReleaseEvent]) -> DateRange:
    """Return the earliest and latest publication timestamps as ISO strings."""
    published = [event.published_at for event in events if event.published_at]
    if not published:
        return DateRange()
    return DateRange(
        earliest=isoformat_z(min(published)),
        latest=isoformat_z(max(published)),
    )
