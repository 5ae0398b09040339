"""Syntax registry — maps a file path to the comment syntax used to scan it."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, List, Optional

import yaml

from todox.config.loader import ConfigError
from todox.languages.models import CommentSyntax

CUSTOM_SYNTAX_DIR = ".todox-languages"


class SyntaxRegistry:
    """Central store for comment syntaxes, keyed by extension and filename.

    Later registrations win, so custom definitions override built-ins that
    claim the same extension.
    """

    def __init__(self, fallback: CommentSyntax) -> None:
        self._syntaxes: Dict[str, CommentSyntax] = {}
        self._by_extension: Dict[str, CommentSyntax] = {}
        self._by_filename: Dict[str, CommentSyntax] = {}
        self.fallback = fallback

    # ---- registration ----

    def register(self, syntax: CommentSyntax) -> None:
        self._syntaxes[syntax.id] = syntax
        for ext in syntax.extensions:
            self._by_extension[ext.lower()] = syntax
        for name in syntax.filenames:
            self._by_filename[name] = syntax

    def register_many(self, syntaxes: List[CommentSyntax]) -> None:
        for s in syntaxes:
            self.register(s)

    # ---- queries ----

    @property
    def all_syntaxes(self) -> List[CommentSyntax]:
        return list(self._syntaxes.values())

    def get(self, syntax_id: str) -> Optional[CommentSyntax]:
        return self._syntaxes.get(syntax_id)

    def for_path(self, path: str) -> CommentSyntax:
        """Select the syntax for *path*: exact filename, then extension, then fallback."""
        p = PurePosixPath(path)
        if p.name in self._by_filename:
            return self._by_filename[p.name]
        return self._by_extension.get(p.suffix.lower(), self.fallback)

    # ---- custom syntax loading ----

    def load_custom_syntaxes(self, directory) -> int:
        """Load YAML syntax files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_syntaxes(path)
        return count

    def _load_yaml_syntaxes(self, path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry:
                raise ConfigError(f"{path}: every syntax needs an 'id'")
            try:
                block = [(str(o), str(c)) for o, c in entry.get("block", [])]
            except (TypeError, ValueError) as exc:
                raise ConfigError(
                    f"{path}: 'block' entries must be [opener, terminator] pairs"
                ) from exc
            syntax = CommentSyntax(
                id=str(entry["id"]),
                name=str(entry.get("name", entry["id"])),
                extensions=[str(e) for e in entry.get("extensions", [])],
                filenames=[str(n) for n in entry.get("filenames", [])],
                line=[str(t) for t in entry.get("line", [])],
                block=block,
                continuation=[str(t) for t in entry.get("continuation", [])],
                string_quotes=str(entry.get("string_quotes", '"')),
            )
            self.register(syntax)
            count += 1
        return count


def build_registry(root) -> SyntaxRegistry:
    """Create a registry with built-ins plus custom syntaxes found under *root*."""
    from todox.languages.builtin import ALL_BUILTIN_SYNTAXES, GENERIC

    registry = SyntaxRegistry(fallback=GENERIC)
    registry.register_many(ALL_BUILTIN_SYNTAXES)
    registry.load_custom_syntaxes(root / CUSTOM_SYNTAX_DIR)

    # Compile introducer patterns now, not inside the per-line loop
    for syntax in [*registry.all_syntaxes, registry.fallback]:
        _ = syntax.compiled_introducers

    return registry
