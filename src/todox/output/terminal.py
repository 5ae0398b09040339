"""Rich terminal reporter — grouped listings, coloured tags, pass/fail verdicts."""

from __future__ import annotations

from itertools import groupby
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from todox.items.models import (
    BriefResult,
    CheckResult,
    DiffResult,
    DiffStatus,
    Item,
    LintResult,
    Priority,
    Snapshot,
    StatsResult,
)

_TAG_STYLE = {
    "BUG": "bold red",
    "FIXME": "red",
    "XXX": "magenta",
    "HACK": "yellow",
    "TODO": "cyan",
    "NOTE": "green",
}

_PRIORITY_MARK = {
    Priority.NORMAL: "",
    Priority.HIGH: "!",
    Priority.URGENT: "!!",
}


def _console(console: Optional[Console]) -> Console:
    return console or Console(highlight=False, soft_wrap=True)


def _tag_text(tag: str, priority: Priority = Priority.NORMAL) -> Text:
    text = Text("[")
    text.append(tag, style=_TAG_STYLE.get(tag, "bold"))
    if priority is not Priority.NORMAL:
        text.append(_PRIORITY_MARK[priority], style="bold red")
    text.append("]")
    return text


def _item_suffix(item: Item) -> Text:
    text = Text()
    if item.author:
        text.append(f" (@{item.author})", style="dim")
    if item.issue_ref:
        text.append(f" ({item.issue_ref})", style="blue")
    return text


def render_list(snapshot: Snapshot, *, console: Optional[Console] = None) -> None:
    """Print items grouped by file, then a one-line summary."""
    console = _console(console)
    file_count = 0
    for file, items in groupby(snapshot.items, key=lambda i: i.file):
        file_count += 1
        console.print(Text(file, style="bold underline"))
        for item in items:
            line = Text(f"  L{item.line}: ")
            line.append_text(_tag_text(item.tag, item.priority))
            line.append(f" {item.message}")
            line.append_text(_item_suffix(item))
            console.print(line)
    console.print(
        f"{snapshot.total} items in {file_count} files "
        f"({snapshot.files_scanned} files scanned)"
    )


def render_diff(diff: DiffResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)
    for entry in diff.entries:
        added = entry.status is DiffStatus.ADDED
        style = "green" if added else "red"
        line = Text(f"{'+' if added else '-'} {entry.item.location} ", style=style)
        line.append_text(_tag_text(entry.item.tag, entry.item.priority))
        line.append(f" {entry.item.message}", style=style)
        console.print(line)
    console.print()
    console.print(Text(f"+{diff.added_count} -{diff.removed_count} (base: {diff.base_ref})"))


def render_check(result: CheckResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)
    if result.passed:
        console.print(Text("PASS", style="bold green"), f"({result.total} items)")
        return
    console.print(Text("FAIL", style="bold red"), f"({result.total} items)")
    for violation in result.violations:
        line = Text("  ")
        line.append(violation.rule, style="yellow")
        line.append(f": {violation.message}")
        console.print(line)


def render_lint(result: LintResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)
    if result.passed:
        console.print(Text("PASS", style="bold green"), f"({result.total} items linted)")
        return

    table = Table(title="Lint violations", show_lines=False, title_style="bold", border_style="dim")
    table.add_column("Location", style="magenta")
    table.add_column("Rule", style="yellow")
    table.add_column("Message")
    for v in result.violations:
        table.add_row(Text(f"{v.file}:{v.line}"), v.rule, Text(v.message))
    console.print(table)
    console.print(
        Text("FAIL", style="bold red"),
        f"({len(result.violations)} violations in {result.total} items)",
    )


def render_brief(result: BriefResult, *, console: Optional[Console] = None) -> None:
    console = _console(console)
    counts = result.priority_counts
    console.print(f"{result.total_items} items in {result.total_files} files")
    console.print(
        Text.assemble(
            ("urgent ", "dim"), (str(counts.urgent), "bold red"),
            ("  high ", "dim"), (str(counts.high), "red"),
            ("  normal ", "dim"), str(counts.normal),
        )
    )
    if result.top_urgent is not None:
        top = result.top_urgent
        line = Text("Top: ", style="bold")
        line.append(f"{top.location} ")
        line.append_text(_tag_text(top.tag, top.priority))
        line.append(f" {top.message}")
        console.print(line)
    if result.trend is not None:
        console.print(
            Text(
                f"Trend: +{result.trend.added} -{result.trend.removed} "
                f"(since {result.trend.base_ref})"
            )
        )


def _bar(count: int, largest: int, width: int = 20) -> str:
    if largest <= 0:
        return ""
    return "█" * max(1, round(count * width / largest))


def render_stats(result: StatsResult, *, console: Optional[Console] = None) -> None:
    """Print tag, priority, author and hotspot sections, then totals."""
    console = _console(console)

    console.print(Text("Tags", style="bold underline"))
    tag_max = result.tag_counts[0][1] if result.tag_counts else 0
    for tag, count in result.tag_counts:
        line = Text("  ")
        line.append(f"{tag:<6}", style=_TAG_STYLE.get(tag, "bold"))
        line.append(f" {count:>4}  ")
        line.append(_bar(count, tag_max), style="dim")
        console.print(line)

    counts = result.priority_counts
    console.print()
    console.print(
        Text.assemble(
            ("Priority", "bold underline"),
            f" normal: {counts.normal} | high: {counts.high} | urgent: {counts.urgent}",
        )
    )

    if result.author_counts:
        console.print()
        console.print(Text("Authors", style="bold underline"))
        author_max = result.author_counts[0][1]
        for author, count in result.author_counts:
            line = Text(f"  {author:<20} {count:>4}  ")
            line.append(_bar(count, author_max), style="dim")
            console.print(line)

    if result.hotspot_files:
        console.print()
        console.print(Text("Hotspots", style="bold underline"))
        for file, count in result.hotspot_files:
            console.print(Text(f"  {file} ({count})"))

    console.print()
    console.print(f"{result.total_items} items across {result.total_files} files")
    if result.trend is not None:
        net = result.trend.added - result.trend.removed
        console.print(
            Text(
                f"Trend since {result.trend.base_ref}: {result.trend.added} added, "
                f"{result.trend.removed} removed ({net:+d})"
            )
        )
