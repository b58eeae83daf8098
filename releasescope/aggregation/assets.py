"""Aggregate attached release files by content type."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._numbers import round_half_up
from .models import AssetStats, FileTypeSummary

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import ReleaseEvent

TOP_FILE_TYPE_LIMIT = 10
UNKNOWN_CONTENT_TYPE = "unknown"


@dc.dataclass(slots=True)
class _FileTypeTally:
    count: int = 0
    downloads: int = 0
    size: int = 0


def summarize_assets(
    events: cabc.Sequence[ReleaseEvent],
    *,
    limit: int = TOP_FILE_TYPE_LIMIT,
) -> AssetStats:
    """Summarize attached files across ``events``.

    The per-release mean is rounded half-up and is zero for an empty
    collection. Content types are ranked by summed downloads, ties broken
    by content type.
    """
    tallies: dict[str, _FileTypeTally] = {}
    for event in events:
        for asset in event.assets:
            content_type = asset.content_type or UNKNOWN_CONTENT_TYPE
            tally = tallies.setdefault(content_type, _FileTypeTally())
            tally.count += 1
            tally.downloads += asset.download_count
            tally.size += asset.size

    total_assets = sum(tally.count for tally in tallies.values())
    ranked = sorted(tallies.items(), key=lambda item: (-item[1].downloads, item[0]))
    return AssetStats(
        total_assets=total_assets,
        total_downloads=sum(tally.downloads for tally in tallies.values()),
        total_size=sum(tally.size for tally in tallies.values()),
        average_assets_per_release=(
            round_half_up(total_assets / len(events)) if events else 0
        ),
        popular_file_types=tuple(
            FileTypeSummary(
                content_type=content_type,
                count=tally.count,
                total_downloads=tally.downloads,
                total_size=tally.size,
            )
            for content_type, tally in ranked[:limit]
        ),
    )
