"""Gate evaluator — applies count and tag thresholds to a snapshot and diff.

Rules run in a fixed order (max, block_tags, max_new) and are never
short-circuited; each failing rule appends its own violations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from todox.config.loader import ConfigError
from todox.config.schema import CheckConfig
from todox.items.models import CheckResult, DiffResult, Snapshot, Violation


@dataclass(frozen=True)
class GateRules:
    """Resolved thresholds for one evaluation. ``None`` disables a rule."""

    max: Optional[int] = None
    block_tags: Tuple[str, ...] = ()
    max_new: Optional[int] = None

    @classmethod
    def resolve(
        cls,
        config: CheckConfig,
        *,
        max: Optional[int] = None,
        block_tags: Iterable[str] = (),
        max_new: Optional[int] = None,
    ) -> "GateRules":
        """Merge CLI overrides onto config; block tags are unioned case-insensitively."""
        merged = dict.fromkeys(t.upper() for t in (*block_tags, *config.block_tags))
        return cls(
            max=max if max is not None else config.max,
            block_tags=tuple(merged),
            max_new=max_new if max_new is not None else config.max_new,
        )


def _check_max(snapshot: Snapshot, limit: int) -> Iterable[Violation]:
    if snapshot.total > limit:
        yield Violation(
            rule="max",
            message=f"Total items ({snapshot.total}) exceeds max ({limit})",
        )


def _check_block_tags(snapshot: Snapshot, blocked: Tuple[str, ...]) -> Iterable[Violation]:
    blocked_set = {t.upper() for t in blocked}
    for item in snapshot.items:
        if item.tag in blocked_set:
            yield Violation(
                rule="block_tags",
                message=f"Blocked tag {item.tag} found in {item.location}",
            )


def _check_max_new(diff: DiffResult, limit: int) -> Iterable[Violation]:
    if diff.added_count > limit:
        yield Violation(
            rule="max_new",
            message=f"New items ({diff.added_count}) exceeds max_new ({limit})",
        )


def evaluate(
    snapshot: Snapshot,
    rules: GateRules,
    diff: Optional[DiffResult] = None,
) -> CheckResult:
    """Evaluate every configured rule. Raises ConfigError if max_new has no diff."""
    if rules.max_new is not None and diff is None:
        raise ConfigError("max_new requires a diff against a base ref (--since)")

    result = CheckResult(total=snapshot.total)
    if rules.max is not None:
        result.violations.extend(_check_max(snapshot, rules.max))
    if rules.block_tags:
        result.violations.extend(_check_block_tags(snapshot, rules.block_tags))
    if rules.max_new is not None and diff is not None:
        result.violations.extend(_check_max_new(diff, rules.max_new))
    return result
