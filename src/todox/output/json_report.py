"""JSON reporter — canonical serialisations of the data model.

Key names and order are consumed by existing tooling; do not reorder.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from todox.items.models import (
    BriefResult,
    CheckResult,
    DiffResult,
    Item,
    LintResult,
    PriorityCounts,
    Snapshot,
    StatsResult,
    TrendInfo,
)


def item_to_dict(item: Item) -> Dict[str, Any]:
    return {
        "file": item.file,
        "line": item.line,
        "tag": item.tag,
        "message": item.message,
        "author": item.author,
        "issue_ref": item.issue_ref,
        "priority": item.priority.value,
    }


def list_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    return {
        "items": [item_to_dict(i) for i in snapshot.items],
        "files_scanned": snapshot.files_scanned,
    }


def diff_to_dict(diff: DiffResult) -> Dict[str, Any]:
    return {
        "entries": [
            {"status": e.status.value, "item": item_to_dict(e.item)} for e in diff.entries
        ],
        "added_count": diff.added_count,
        "removed_count": diff.removed_count,
        "base_ref": diff.base_ref,
    }


def check_to_dict(result: CheckResult) -> Dict[str, Any]:
    return {
        "passed": result.passed,
        "total": result.total,
        "violations": [{"rule": v.rule, "message": v.message} for v in result.violations],
    }


def lint_to_dict(result: LintResult) -> Dict[str, Any]:
    return {
        "passed": result.passed,
        "total": result.total,
        "violations": [
            {"rule": v.rule, "file": v.file, "line": v.line, "message": v.message}
            for v in result.violations
        ],
    }


def _priority_counts_to_dict(counts: PriorityCounts) -> Dict[str, int]:
    return {"normal": counts.normal, "high": counts.high, "urgent": counts.urgent}


def _trend_to_dict(trend: Optional[TrendInfo]) -> Optional[Dict[str, Any]]:
    if trend is None:
        return None
    return {"added": trend.added, "removed": trend.removed, "base_ref": trend.base_ref}


def brief_to_dict(result: BriefResult) -> Dict[str, Any]:
    return {
        "total_items": result.total_items,
        "total_files": result.total_files,
        "priority_counts": _priority_counts_to_dict(result.priority_counts),
        "top_urgent": item_to_dict(result.top_urgent) if result.top_urgent else None,
        "trend": _trend_to_dict(result.trend),
    }


def stats_to_dict(result: StatsResult) -> Dict[str, Any]:
    return {
        "total_items": result.total_items,
        "total_files": result.total_files,
        "tag_counts": [{"tag": t, "count": n} for t, n in result.tag_counts],
        "priority_counts": _priority_counts_to_dict(result.priority_counts),
        "author_counts": [{"author": a, "count": n} for a, n in result.author_counts],
        "hotspot_files": [{"file": f, "count": n} for f, n in result.hotspot_files],
        "trend": _trend_to_dict(result.trend),
    }


def dumps(data: Dict[str, Any]) -> str:
    """Return formatted JSON string."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_list(snapshot: Snapshot) -> str:
    return dumps(list_to_dict(snapshot))


def render_diff(diff: DiffResult) -> str:
    return dumps(diff_to_dict(diff))


def render_check(result: CheckResult) -> str:
    return dumps(check_to_dict(result))


def render_lint(result: LintResult) -> str:
    return dumps(lint_to_dict(result))


def render_brief(result: BriefResult) -> str:
    return dumps(brief_to_dict(result))


def render_stats(result: StatsResult) -> str:
    return dumps(stats_to_dict(result))
