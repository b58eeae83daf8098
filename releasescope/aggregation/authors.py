"""Aggregate releases per publishing account."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .models import AuthorStats, AuthorSummary, BotHumanSplit

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import AuthorType, ReleaseEvent

TOP_AUTHOR_LIMIT = 10


@dc.dataclass(slots=True)
class _AuthorTally:
    """Running totals for one login."""

    login: str
    author_type: AuthorType
    is_bot: bool
    release_count: int = 0
    repositories: set[str] = dc.field(default_factory=set)

    def to_summary(self) -> AuthorSummary:
        return AuthorSummary(
            login=self.login,
            release_count=self.release_count,
            type=self.author_type,
            repository_count=len(self.repositories),
        )


def _tally_authors(events: cabc.Iterable[ReleaseEvent]) -> dict[str, _AuthorTally]:
    tallies: dict[str, _AuthorTally] = {}
    for event in events:
        author = event.author
        tally = tallies.get(author.login)
        if tally is None:
            # The first release seen fixes the declared type for the login.
            tally = _AuthorTally(
                login=author.login,
                author_type=author.type,
                is_bot=author.is_bot,
            )
            tallies[author.login] = tally
        tally.release_count += 1
        tally.repositories.add(event.repository)
    return tallies


def summarize_authors(
    events: cabc.Iterable[ReleaseEvent],
    *,
    limit: int = TOP_AUTHOR_LIMIT,
) -> AuthorStats:
    """Summarize release authorship.

    Logins are grouped exactly (case-sensitive). The top list is ordered by
    release count descending with ties broken by login, and the bot/human
    split counts distinct accounts rather than releases.
    """
    tallies = list(_tally_authors(events).values())
    ranked = sorted(tallies, key=lambda tally: (-tally.release_count, tally.login))
    bots = sum(1 for tally in tallies if tally.is_bot)
    return AuthorStats(
        total_authors=len(tallies),
        top_authors=tuple(tally.to_summary() for tally in ranked[:limit]),
        bot_vs_human_ratio=BotHumanSplit(bots=bots, humans=len(tallies) - bots),
    )
