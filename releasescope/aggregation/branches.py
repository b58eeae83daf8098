"""Aggregate releases by the branch their tag was cut from."""

from __future__ import annotations

import collections
import typing as typ

from ._numbers import round_half_up
from .models import BranchStats, BranchSummary

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import ReleaseEvent

TOP_BRANCH_LIMIT = 10
UNKNOWN_BRANCH = "unknown"


def summarize_branches(
    events: cabc.Sequence[ReleaseEvent],
    *,
    limit: int = TOP_BRANCH_LIMIT,
) -> BranchStats:
    """Count releases per target branch with each branch's share.

    Shares are rounded independently, so they need not add up to 100.
    """
    counts = collections.Counter(
        event.target_commitish or UNKNOWN_BRANCH for event in events
    )
    total = len(events)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return BranchStats(
        total_branches=len(counts),
        top_branches=tuple(
            BranchSummary(
                branch=branch,
                release_count=count,
                percentage=round_half_up(100 * count / total),
            )
            for branch, count in ranked[:limit]
        ),
    )
