"""Item models, snapshot diffing, and summaries."""

from todox.items.brief import compute_brief
from todox.items.differ import compute_diff
from todox.items.models import (
    CheckResult,
    DiffEntry,
    DiffResult,
    DiffStatus,
    Item,
    Priority,
    Snapshot,
    StatsResult,
    Violation,
)
from todox.items.stats import compute_stats

__all__ = [
    "CheckResult",
    "DiffEntry",
    "DiffResult",
    "DiffStatus",
    "Item",
    "Priority",
    "Snapshot",
    "StatsResult",
    "Violation",
    "compute_brief",
    "compute_diff",
    "compute_stats",
]
