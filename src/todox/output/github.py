"""GitHub Actions workflow-command annotations (``::warning file=...::``)."""

from __future__ import annotations

from typing import List

from todox.items.models import CheckResult, DiffResult, Item, LintResult, Snapshot


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _annotation(level: str, message: str, file: str = "", line: int = 0) -> str:
    props = []
    if file:
        props.append(f"file={_escape_property(file)}")
    if line > 0:
        props.append(f"line={line}")
    head = f"::{level} {','.join(props)}" if props else f"::{level}"
    return f"{head}::{_escape_data(message)}"


def _item_annotation(item: Item, level: str = "notice") -> str:
    return _annotation(level, f"[{item.tag}] {item.message}", item.file, item.line)


def format_list(snapshot: Snapshot) -> List[str]:
    lines = [_item_annotation(i) for i in snapshot.items]
    lines.append(_annotation("notice", f"{snapshot.total} items in {snapshot.files_scanned} files scanned"))
    return lines


def format_diff(diff: DiffResult) -> List[str]:
    lines = [_item_annotation(i, level="warning") for i in diff.added]
    lines.append(
        _annotation(
            "notice",
            f"+{diff.added_count} -{diff.removed_count} (base: {diff.base_ref})",
        )
    )
    return lines


def format_check(result: CheckResult) -> List[str]:
    if result.passed:
        return [_annotation("notice", f"todox check passed ({result.total} items)")]
    return [_annotation("error", f"{v.rule}: {v.message}") for v in result.violations]


def format_lint(result: LintResult) -> List[str]:
    if result.passed:
        return [_annotation("notice", f"todox lint passed ({result.total} items)")]
    return [
        _annotation("warning", f"{v.rule}: {v.message}", v.file, v.line)
        for v in result.violations
    ]
