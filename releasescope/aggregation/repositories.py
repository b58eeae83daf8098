"""Per-repository release totals for the whole-dataset dashboard."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

from releasescope.common.time import isoformat_z

from .models import RepositorySummary
from .versions import ReleaseType, classify_release_type

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import ReleaseEvent


@dc.dataclass(slots=True)
class _RepositoryTally:
    name: str
    total: int = 0
    stable: int = 0
    prereleases: int = 0
    drafts: int = 0
    downloads: int = 0
    latest: dt.datetime | None = None
    authors: set[str] = dc.field(default_factory=set)

    def add(self, event: ReleaseEvent) -> None:
        self.total += 1
        self.authors.add(event.author.login)
        match classify_release_type(draft=event.draft, prerelease=event.prerelease):
            case ReleaseType.DRAFT:
                self.drafts += 1
            case ReleaseType.PRERELEASE:
                self.prereleases += 1
            case ReleaseType.STABLE:
                self.stable += 1
        self.downloads += sum(asset.download_count for asset in event.assets)
        published = event.published_at
        if published is not None and (self.latest is None or published > self.latest):
            self.latest = published

    def to_summary(self) -> RepositorySummary:
        return RepositorySummary(
            name=self.name,
            total_releases=self.total,
            stable_releases=self.stable,
            prereleases=self.prereleases,
            drafts=self.drafts,
            total_downloads=self.downloads,
            author_count=len(self.authors),
            latest_release=isoformat_z(self.latest) if self.latest else None,
        )


def summarize_repositories(
    events: cabc.Iterable[ReleaseEvent],
) -> tuple[RepositorySummary, ...]:
    """Summarize each repository, busiest first and then by name."""
    tallies: dict[str, _RepositoryTally] = {}
    for event in events:
        tally = tallies.get(event.repository)
        if tally is None:
            tally = tallies[event.repository] = _RepositoryTally(event.repository)
        tally.add(event)
    ranked = sorted(tallies.values(), key=lambda tally: (-tally.total, tally.name))
    return tuple(tally.to_summary() for tally in ranked)
