"""Item, snapshot, diff and gate result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

WORKTREE_REF = "WORKTREE"


class Priority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def from_bangs(cls, bangs: Optional[str]) -> "Priority":
        if bangs == "!!":
            return cls.URGENT
        if bangs == "!":
            return cls.HIGH
        return cls.NORMAL

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.NORMAL: 0, Priority.HIGH: 1, Priority.URGENT: 2}


class DiffStatus(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


Identity = Tuple[str, str, str]


@dataclass(frozen=True)
class Item:
    """One tagged comment found at scan time."""

    file: str
    line: int
    tag: str
    message: str
    author: Optional[str] = None
    issue_ref: Optional[str] = None
    priority: Priority = Priority.NORMAL

    @property
    def identity(self) -> Identity:
        """Cross-snapshot matching key. Excludes ``line`` so moved items still match."""
        return (self.file, self.tag, self.message.strip().lower())

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class SkippedFile:
    """Record of a candidate file (or unlistable directory) left out of a snapshot."""

    path: str
    reason: str  # 'binary', 'unreadable', 'encoding'


@dataclass(frozen=True)
class Snapshot:
    """Complete ordered result of scanning one tree state."""

    items: Tuple[Item, ...] = ()
    files_scanned: int = 0
    ref: str = WORKTREE_REF
    skipped_files: Tuple[SkippedFile, ...] = ()

    @property
    def total(self) -> int:
        return len(self.items)

    def filter_tags(self, tags) -> "Snapshot":
        """Return a copy restricted to *tags* (case-insensitive)."""
        wanted = {t.upper() for t in tags}
        return Snapshot(
            items=tuple(i for i in self.items if i.tag in wanted),
            files_scanned=self.files_scanned,
            ref=self.ref,
            skipped_files=self.skipped_files,
        )


@dataclass(frozen=True)
class DiffEntry:
    status: DiffStatus
    item: Item


@dataclass(frozen=True)
class DiffResult:
    """Added/removed partition between a base ref and the current tree."""

    entries: Tuple[DiffEntry, ...] = ()
    base_ref: str = ""

    @property
    def added(self) -> List[Item]:
        return [e.item for e in self.entries if e.status is DiffStatus.ADDED]

    @property
    def removed(self) -> List[Item]:
        return [e.item for e in self.entries if e.status is DiffStatus.REMOVED]

    @property
    def added_count(self) -> int:
        return len(self.added)

    @property
    def removed_count(self) -> int:
        return len(self.removed)


@dataclass(frozen=True)
class Violation:
    rule: str  # 'max' | 'block_tags' | 'max_new'
    message: str


@dataclass
class CheckResult:
    """Outcome of evaluating the gate rules."""

    total: int = 0
    violations: List[Violation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations


@dataclass(frozen=True)
class LintViolation:
    rule: str
    file: str
    line: int
    message: str


@dataclass
class LintResult:
    total: int = 0
    violations: List[LintViolation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations


@dataclass(frozen=True)
class PriorityCounts:
    normal: int = 0
    high: int = 0
    urgent: int = 0


@dataclass(frozen=True)
class TrendInfo:
    added: int
    removed: int
    base_ref: str


@dataclass(frozen=True)
class BriefResult:
    total_items: int
    total_files: int
    priority_counts: PriorityCounts
    top_urgent: Optional[Item] = None
    trend: Optional[TrendInfo] = None


@dataclass(frozen=True)
class StatsResult:
    """Breakdown of a snapshot. Count lists are ``(key, count)`` pairs, largest first."""

    total_items: int
    total_files: int
    tag_counts: Tuple[Tuple[str, int], ...]
    priority_counts: PriorityCounts
    author_counts: Tuple[Tuple[str, int], ...]
    hotspot_files: Tuple[Tuple[str, int], ...]
    trend: Optional[TrendInfo] = None
