"""Tag, priority, author and per-file breakdown of a snapshot."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional, Tuple

from todox.items.brief import count_priorities, trend_of
from todox.items.models import DiffResult, Snapshot, StatsResult

HOTSPOT_LIMIT = 10


def _ranked(keys: Iterable[str], limit: Optional[int] = None) -> Tuple[Tuple[str, int], ...]:
    """Count *keys*; highest count first, ties broken by key."""
    ranked = sorted(Counter(keys).items(), key=lambda kv: (-kv[1], kv[0]))
    return tuple(ranked[:limit] if limit is not None else ranked)


def compute_stats(
    snapshot: Snapshot,
    diff: Optional[DiffResult] = None,
    *,
    hotspots: int = HOTSPOT_LIMIT,
) -> StatsResult:
    """Summarise *snapshot*. Items without an author are left out of ``author_counts``.

    Only the *hotspots* files with the most items are kept.
    """
    items = snapshot.items
    return StatsResult(
        total_items=snapshot.total,
        total_files=len({i.file for i in items}),
        tag_counts=_ranked(i.tag for i in items),
        priority_counts=count_priorities(items),
        author_counts=_ranked(i.author for i in items if i.author),
        hotspot_files=_ranked((i.file for i in items), limit=hotspots),
        trend=trend_of(diff),
    )
