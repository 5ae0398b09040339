"""Markdown reporter — GitHub-flavoured tables for PR comments and job summaries."""

from __future__ import annotations

from typing import List

from todox.items.models import (
    CheckResult,
    DiffResult,
    DiffStatus,
    LintResult,
    Priority,
    Snapshot,
    StatsResult,
)

_PRIORITY_MARK = {
    Priority.NORMAL: "",
    Priority.HIGH: "!",
    Priority.URGENT: "!!",
}


def escape_cell(value: str) -> str:
    """Make *value* safe inside a table cell: no row breaks, no links, no code spans."""
    return (
        value.replace("|", "\\|")
        .replace("\n", " ")
        .replace("\r", "")
        .replace("[", "\\[")
        .replace("]", "\\]")
        .replace("`", "\\`")
    )


def _row(*cells: object) -> str:
    return "| " + " | ".join(str(c) for c in cells) + " |"


def _header(*names: str) -> List[str]:
    return [_row(*names), "|" + "|".join("-" * (len(n) + 2) for n in names) + "|"]


def format_list(snapshot: Snapshot) -> List[str]:
    lines = _header("File", "Line", "Tag", "Priority", "Message", "Author", "Issue")
    for item in snapshot.items:
        lines.append(
            _row(
                escape_cell(item.file),
                item.line,
                item.tag,
                _PRIORITY_MARK[item.priority],
                escape_cell(item.message),
                escape_cell(item.author or ""),
                escape_cell(item.issue_ref or ""),
            )
        )
    lines += ["", f"**{snapshot.total} items found**"]
    return lines


def format_diff(diff: DiffResult) -> List[str]:
    lines = _header("Status", "File", "Line", "Tag", "Message")
    for entry in diff.entries:
        lines.append(
            _row(
                "+" if entry.status is DiffStatus.ADDED else "-",
                escape_cell(entry.item.file),
                entry.item.line,
                entry.item.tag,
                escape_cell(entry.item.message),
            )
        )
    lines += [
        "",
        f"**+{diff.added_count} -{diff.removed_count}** (base: `{escape_cell(diff.base_ref)}`)",
    ]
    return lines


def format_check(result: CheckResult) -> List[str]:
    if result.passed:
        return ["## PASS", "", f"All checks passed ({result.total} items total)."]
    lines = ["## FAIL", ""]
    lines += [
        f"- **{escape_cell(v.rule)}**: {escape_cell(v.message)}" for v in result.violations
    ]
    return lines


def format_lint(result: LintResult) -> List[str]:
    if result.passed:
        return ["## PASS", "", f"All lint checks passed ({result.total} items total)."]
    lines = ["## FAIL", ""]
    lines += _header("File", "Line", "Rule", "Message")
    for v in result.violations:
        lines.append(_row(escape_cell(v.file), v.line, escape_cell(v.rule), escape_cell(v.message)))
    lines += ["", f"**{len(result.violations)} violations in {result.total} items**"]
    return lines


def format_stats(result: StatsResult) -> List[str]:
    counts = result.priority_counts
    lines = ["## Tags", ""]
    lines += _header("Tag", "Count")
    lines += [_row(tag, count) for tag, count in result.tag_counts]
    lines += [
        "",
        "## Priority",
        "",
        f"normal: {counts.normal} | high: {counts.high} | urgent: {counts.urgent}",
    ]
    if result.author_counts:
        lines += ["", "## Authors", ""]
        lines += _header("Author", "Count")
        lines += [_row(escape_cell(a), n) for a, n in result.author_counts]
    if result.hotspot_files:
        lines += ["", "## Hotspots", ""]
        lines += _header("File", "Count")
        lines += [_row(escape_cell(f), n) for f, n in result.hotspot_files]
    lines += ["", f"**{result.total_items} items across {result.total_files} files**"]
    if result.trend is not None:
        net = result.trend.added - result.trend.removed
        lines.append(
            f"Trend since `{escape_cell(result.trend.base_ref)}`: "
            f"{result.trend.added} added, {result.trend.removed} removed ({net:+d})"
        )
    return lines
