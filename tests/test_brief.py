"""Tests for the brief summary."""

from conftest import make_item, make_snapshot

from todox.items.brief import compute_brief
from todox.items.differ import compute_diff
from todox.items.models import Priority


class TestCounts:
    def test_empty(self):
        brief = compute_brief(make_snapshot())
        assert brief.total_items == 0
        assert brief.total_files == 0
        assert brief.top_urgent is None
        assert brief.trend is None

    def test_priority_counts_and_files(self):
        snap = make_snapshot(
            make_item(file="a.rs", message="1"),
            make_item(file="a.rs", message="2", priority=Priority.HIGH),
            make_item(file="b.rs", message="3", priority=Priority.URGENT),
        )
        brief = compute_brief(snap)
        assert brief.total_items == 3
        assert brief.total_files == 2
        counts = brief.priority_counts
        assert (counts.normal, counts.high, counts.urgent) == (1, 1, 1)


class TestTopUrgent:
    def test_normal_items_never_selected(self):
        assert compute_brief(make_snapshot(make_item(tag="BUG"))).top_urgent is None

    def test_priority_beats_tag(self):
        high_bug = make_item(tag="BUG", message="high", priority=Priority.HIGH)
        urgent_note = make_item(tag="NOTE", message="urgent", priority=Priority.URGENT)
        assert compute_brief(make_snapshot(high_bug, urgent_note)).top_urgent == urgent_note

    def test_tag_severity_breaks_ties(self, urgent_item):
        urgent_todo = make_item(tag="TODO", message="todo", priority=Priority.URGENT)
        snap = make_snapshot(urgent_todo, urgent_item)
        assert compute_brief(snap).top_urgent == urgent_item

    def test_scan_order_breaks_full_ties(self):
        first = make_item(line=1, message="first", priority=Priority.HIGH)
        second = make_item(line=2, message="second", priority=Priority.HIGH)
        assert compute_brief(make_snapshot(first, second)).top_urgent == first


class TestTrend:
    def test_trend_from_diff(self):
        base = make_snapshot(make_item(message="old"), ref="v1.0")
        head = make_snapshot(make_item(message="new"), make_item(message="newer"))
        brief = compute_brief(head, compute_diff(base, head))
        assert brief.trend is not None
        assert (brief.trend.added, brief.trend.removed, brief.trend.base_ref) == (2, 1, "v1.0")
