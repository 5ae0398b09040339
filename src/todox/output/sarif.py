"""SARIF v2.1.0 exporter — GitHub Code Scanning and other SARIF consumers.

One rule per tag (``todox/TODO`` ...) for listings and diffs; gate and lint
violations are reported under their rule names.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from todox import __version__
from todox.config.schema import tag_severity
from todox.items.models import CheckResult, DiffResult, DiffStatus, Item, LintResult, Snapshot

_SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"


def _level(tag: str) -> str:
    """BUG/FIXME → error, XXX/HACK → warning, TODO/NOTE → note."""
    sev = tag_severity(tag)
    if sev >= 4:
        return "error"
    if sev >= 2:
        return "warning"
    return "note"


def _rule_id(tag: str) -> str:
    return f"todox/{tag}"


def _location(file: str, line: int) -> Dict[str, Any]:
    return {
        "physicalLocation": {
            "artifactLocation": {"uri": file},
            "region": {"startLine": max(line, 1)},
        }
    }


def _tag_rules(items: Iterable[Item]) -> List[Dict[str, Any]]:
    rules: List[Dict[str, Any]] = []
    seen: set[str] = set()
    for item in items:
        if item.tag in seen:
            continue
        seen.add(item.tag)
        rules.append({
            "id": _rule_id(item.tag),
            "name": item.tag,
            "shortDescription": {"text": f"{item.tag} comment"},
            "defaultConfiguration": {"level": _level(item.tag)},
        })
    return rules


def _item_result(item: Item, prefix: str = "") -> Dict[str, Any]:
    return {
        "ruleId": _rule_id(item.tag),
        "level": _level(item.tag),
        "message": {"text": f"{prefix}{item.tag}: {item.message}"},
        "locations": [_location(item.file, item.line)],
        "properties": {
            "priority": item.priority.value,
            **({"author": item.author} if item.author else {}),
            **({"issue_ref": item.issue_ref} if item.issue_ref else {}),
        },
    }


def _envelope(rules: List[Dict[str, Any]], results: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "$schema": _SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "todox",
                        "version": __version__,
                        "rules": rules,
                    }
                },
                "results": results,
            }
        ],
    }


def list_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    return _envelope(_tag_rules(snapshot.items), [_item_result(i) for i in snapshot.items])


def diff_to_dict(diff: DiffResult) -> Dict[str, Any]:
    """Only added items become results; removals are not findings."""
    added = diff.added
    return _envelope(_tag_rules(added), [_item_result(i, prefix="New ") for i in added])


def check_to_dict(result: CheckResult) -> Dict[str, Any]:
    rule_names = list(dict.fromkeys(v.rule for v in result.violations))
    rules = [
        {"id": f"todox/check/{name}", "name": name, "defaultConfiguration": {"level": "error"}}
        for name in rule_names
    ]
    results = [
        {
            "ruleId": f"todox/check/{v.rule}",
            "level": "error",
            "message": {"text": v.message},
        }
        for v in result.violations
    ]
    return _envelope(rules, results)


def lint_to_dict(result: LintResult) -> Dict[str, Any]:
    rule_names = list(dict.fromkeys(v.rule for v in result.violations))
    rules = [
        {"id": f"todox/lint/{name}", "name": name, "defaultConfiguration": {"level": "warning"}}
        for name in rule_names
    ]
    results = [
        {
            "ruleId": f"todox/lint/{v.rule}",
            "level": "warning",
            "message": {"text": v.message},
            "locations": [_location(v.file, v.line)],
        }
        for v in result.violations
    ]
    return _envelope(rules, results)


def render(data: Dict[str, Any]) -> str:
    """Return SARIF JSON string."""
    return json.dumps(data, indent=2, ensure_ascii=False)
