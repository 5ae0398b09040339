"""Snapshot differ — multiset comparison of item identities.

An identity seen ``n`` times in the base and ``m`` times in the head yields
``max(0, m - n)`` added and ``max(0, n - m)`` removed entries. The first
``min(n, m)`` occurrences on each side (in scan order) are the unchanged
ones, so surplus occurrences are always reported from the end of a bucket.

A message edit changes the identity; it shows up as one removal plus one
addition, never as an in-place modification.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional

from todox.items.models import DiffEntry, DiffResult, DiffStatus, Item, Snapshot


def _surplus(items: Iterable[Item], other: Counter) -> List[Item]:
    """Items of *items* left over once *other*'s counts are matched off."""
    matched: Counter = Counter()
    out: List[Item] = []
    for item in items:
        key = item.identity
        if matched[key] < other[key]:
            matched[key] += 1
        else:
            out.append(item)
    return out


def compute_diff(
    base: Snapshot,
    head: Snapshot,
    *,
    tags: Optional[Iterable[str]] = None,
) -> DiffResult:
    """Compare *base* (historical) with *head* (current). Neither is mutated."""
    if tags:
        tags = list(tags)
        base = base.filter_tags(tags)
        head = head.filter_tags(tags)

    base_counts = Counter(i.identity for i in base.items)
    head_counts = Counter(i.identity for i in head.items)

    entries = [DiffEntry(DiffStatus.ADDED, i) for i in _surplus(head.items, base_counts)]
    entries.extend(
        DiffEntry(DiffStatus.REMOVED, i) for i in _surplus(base.items, head_counts)
    )
    return DiffResult(entries=tuple(entries), base_ref=base.ref)
