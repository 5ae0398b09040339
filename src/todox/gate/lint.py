"""Lint rules — per-item style checks on the tagged line as written.

Lint re-parses the source line of every item so it can see details the Item
does not carry (whether a colon was present, how the tag was cased).
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from todox.config.schema import LintConfig
from todox.items.models import Item, LintResult, LintViolation, Snapshot
from todox.scanner.engine import FileReadError, FileScanner, split_lines
from todox.scanner.grammar import ParsedTag

LintCheck = Callable[[Item, ParsedTag, LintConfig], Optional[str]]


def _require_colon(item: Item, parsed: ParsedTag, cfg: LintConfig) -> Optional[str]:
    if cfg.require_colon and not parsed.has_colon:
        return f"{item.tag} must be followed by ':'"
    return None


def _require_author(item: Item, parsed: ParsedTag, cfg: LintConfig) -> Optional[str]:
    if cfg.require_author and item.author is None:
        return f"{item.tag} has no (author)"
    return None


def _uppercase_tag(item: Item, parsed: ParsedTag, cfg: LintConfig) -> Optional[str]:
    if cfg.uppercase_tag and parsed.raw_tag != parsed.raw_tag.upper():
        return f"tag '{parsed.raw_tag}' should be written '{item.tag}'"
    return None


def _no_empty_message(item: Item, parsed: ParsedTag, cfg: LintConfig) -> Optional[str]:
    if cfg.no_empty_message and not item.message:
        return f"{item.tag} has an empty message"
    return None


def _max_message_length(item: Item, parsed: ParsedTag, cfg: LintConfig) -> Optional[str]:
    limit = cfg.max_message_length
    if limit is not None and len(item.message) > limit:
        return f"message length ({len(item.message)}) exceeds max_message_length ({limit})"
    return None


LINT_RULES: Dict[str, LintCheck] = {
    "require_colon": _require_colon,
    "require_author": _require_author,
    "uppercase_tag": _uppercase_tag,
    "no_empty_message": _no_empty_message,
    "max_message_length": _max_message_length,
}


def lint_items(
    items: Iterable[tuple[Item, ParsedTag]],
    config: LintConfig,
) -> List[LintViolation]:
    violations: List[LintViolation] = []
    for item, parsed in items:
        for name, check in LINT_RULES.items():
            msg = check(item, parsed, config)
            if msg is not None:
                violations.append(
                    LintViolation(rule=name, file=item.file, line=item.line, message=msg)
                )
    return violations


def _reparse(snapshot: Snapshot, scanner: FileScanner) -> Iterable[tuple[Item, ParsedTag]]:
    lines_by_file: Dict[str, List[str]] = {}
    for item in snapshot.items:
        lines = lines_by_file.get(item.file)
        if lines is None:
            try:
                lines = split_lines(scanner.read_text(item.file))
            except FileReadError:
                lines = []
            lines_by_file[item.file] = lines
        if item.line > len(lines):
            continue
        parsed = scanner.grammar_for(item.file).parse_line(lines[item.line - 1])
        if parsed is not None:
            yield item, parsed


def run_lint(snapshot: Snapshot, scanner: FileScanner, config: LintConfig) -> LintResult:
    """Lint every item of *snapshot*, in snapshot order."""
    return LintResult(
        total=snapshot.total,
        violations=lint_items(_reparse(snapshot, scanner), config),
    )
