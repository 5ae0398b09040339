"""Configuration schema — frozen dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

OutputFormat = Literal["text", "json", "sarif", "github", "markdown"]

OUTPUT_FORMATS: Tuple[str, ...] = ("text", "json", "sarif", "github", "markdown")

DEFAULT_TAGS: Tuple[str, ...] = ("TODO", "FIXME", "HACK", "XXX", "BUG", "NOTE")

DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = (
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "target",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
)

TAG_SEVERITY: dict[str, int] = {
    "NOTE": 0,
    "TODO": 1,
    "HACK": 2,
    "XXX": 3,
    "FIXME": 4,
    "BUG": 5,
}


def tag_severity(tag: str) -> int:
    """Rank of *tag*; custom tags rank with TODO."""
    return TAG_SEVERITY.get(tag.upper(), TAG_SEVERITY["TODO"])


@dataclass(frozen=True)
class ScanConfig:
    workers: Optional[int] = None  # None = executor default
    strict: bool = False  # unreadable files abort the scan


@dataclass(frozen=True)
class CheckConfig:
    max: Optional[int] = None
    max_new: Optional[int] = None
    block_tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LintConfig:
    require_colon: bool = False
    require_author: bool = False
    uppercase_tag: bool = False
    no_empty_message: bool = False
    max_message_length: Optional[int] = None


@dataclass(frozen=True)
class OutputConfig:
    # None means "not configured": text, or json under CI
    format: Optional[OutputFormat] = None


@dataclass(frozen=True)
class TodoxConfig:
    version: str = "1.0"
    tags: Tuple[str, ...] = DEFAULT_TAGS
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    exclude_patterns: Tuple[str, ...] = ()
    scan: ScanConfig = field(default_factory=ScanConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
