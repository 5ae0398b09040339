"""File walker — deterministic, lazy traversal honouring exclusion rules."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List

from todox.config.loader import ConfigError
from todox.config.schema import TodoxConfig

BINARY_SNIFF_BYTES = 8000


def is_binary(data: bytes) -> bool:
    """Cheap binary heuristic: a NUL byte in the first few KB."""
    return b"\x00" in data[:BINARY_SNIFF_BYTES]


def walk_order(paths: Iterable[str]) -> List[str]:
    """Sort relative paths the way ``FileWalker.walk`` visits them."""
    return sorted(paths, key=lambda p: p.split("/"))


class FileWalker:
    """Yield candidate file paths (relative, ``/``-separated) under *root*.

    A path is excluded when any directory component is in ``exclude_dirs``
    or when any ``exclude_patterns`` regex matches the relative path.
    """

    def __init__(self, root: Path, config: TodoxConfig) -> None:
        self.root = root
        self.exclude_dirs = frozenset(config.exclude_dirs)
        try:
            self._exclude_res: List[re.Pattern[str]] = [
                re.compile(p) for p in config.exclude_patterns
            ]
        except re.error as exc:
            raise ConfigError(f"Invalid exclude pattern: {exc}") from exc
        self.skipped_binary: List[str] = []
        self.unreadable_dirs: List[str] = []

    def is_excluded(self, rel_path: str) -> bool:
        parts = rel_path.split("/")
        if any(part in self.exclude_dirs for part in parts[:-1]):
            return True
        return any(p.search(rel_path) for p in self._exclude_res)

    def filter_paths(self, paths: Iterable[str]) -> Iterator[str]:
        """Apply the exclusion rules to an externally supplied path list."""
        for path in paths:
            if not self.is_excluded(path):
                yield path

    def sift(self, paths: Iterable[str]) -> Iterator[str]:
        """Like ``filter_paths`` for paths on disk under *root*.

        Paths that are not regular files are dropped; binaries are recorded
        in ``skipped_binary``.
        """
        for rel in self.filter_paths(paths):
            full = os.path.join(self.root, rel)
            if not os.path.isfile(full):
                continue
            if self._looks_binary(full):
                self.skipped_binary.append(rel)
                continue
            yield rel

    def walk(self) -> Iterator[str]:
        """Depth-first walk of the filesystem in lexical order, skipping binaries."""
        yield from self._walk_dir(self.root, "")

    def _walk_dir(self, directory: Path, prefix: str) -> Iterator[str]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            self.unreadable_dirs.append(prefix.rstrip("/") or ".")
            return

        for entry in entries:
            rel = f"{prefix}{entry.name}"
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name in self.exclude_dirs:
                        continue
                    yield from self._walk_dir(Path(entry.path), rel + "/")
                    continue
                if not entry.is_file():
                    continue
            except OSError:
                continue

            if any(p.search(rel) for p in self._exclude_res):
                continue
            if self._looks_binary(entry.path):
                self.skipped_binary.append(rel)
                continue
            yield rel

    @staticmethod
    def _looks_binary(path: str) -> bool:
        try:
            with open(path, "rb") as f:
                return is_binary(f.read(BINARY_SNIFF_BYTES))
        except OSError:
            # Unreadable files surface as FileReadError in the scanner
            return False
