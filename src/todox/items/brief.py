"""One-screen summary of a snapshot, with an optional trend from a diff."""

from __future__ import annotations

from typing import Iterable, Optional

from todox.config.schema import tag_severity
from todox.items.models import (
    BriefResult,
    DiffResult,
    Item,
    Priority,
    PriorityCounts,
    Snapshot,
    TrendInfo,
)


def count_priorities(items: Iterable[Item]) -> PriorityCounts:
    counts = {p: 0 for p in Priority}
    for item in items:
        counts[item.priority] += 1
    return PriorityCounts(
        normal=counts[Priority.NORMAL],
        high=counts[Priority.HIGH],
        urgent=counts[Priority.URGENT],
    )


def trend_of(diff: Optional[DiffResult]) -> Optional[TrendInfo]:
    if diff is None:
        return None
    return TrendInfo(added=diff.added_count, removed=diff.removed_count, base_ref=diff.base_ref)


def _top_urgent(snapshot: Snapshot) -> Optional[Item]:
    """Highest-priority item; ties go to the more severe tag, then scan order."""
    best: Optional[Item] = None
    for item in snapshot.items:
        if item.priority is Priority.NORMAL:
            continue
        if best is None or (item.priority.rank, tag_severity(item.tag)) > (
            best.priority.rank,
            tag_severity(best.tag),
        ):
            best = item
    return best


def compute_brief(snapshot: Snapshot, diff: Optional[DiffResult] = None) -> BriefResult:
    return BriefResult(
        total_items=snapshot.total,
        total_files=len({i.file for i in snapshot.items}),
        priority_counts=count_priorities(snapshot.items),
        top_urgent=_top_urgent(snapshot),
        trend=trend_of(diff),
    )
