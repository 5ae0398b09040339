"""Tree providers — where a snapshot's file list and contents come from.

The snapshot builder only needs three things from a provider: a label for
the snapshot's ``ref``, the candidate paths (filtered by the walker), and
the bytes of one path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Optional, Protocol

from todox.git.adapter import (
    ProviderError,
    list_tree,
    list_worktree_files,
    read_blob,
    resolve_ref,
)
from todox.items.models import WORKTREE_REF
from todox.scanner.walker import FileWalker, walk_order


class TreeProvider(Protocol):
    root: Path
    label: str

    def candidates(self, walker: FileWalker) -> Iterator[str]: ...

    def read_bytes(self, path: str) -> bytes: ...


class WorkingTreeProvider:
    """The live filesystem under *root*.

    Inside a git work tree the candidate list comes from ``git ls-files`` so
    ignored files stay out. Anywhere else the walker reads the directory tree.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.label = WORKTREE_REF

    def candidates(self, walker: FileWalker) -> Iterator[str]:
        try:
            paths = list_worktree_files(self.root)
        except ProviderError:
            return walker.walk()
        return walker.sift(walk_order(paths))

    def read_bytes(self, path: str) -> bytes:
        return (self.root / path).read_bytes()


class GitRefProvider:
    """The tracked tree of a git ref, read through ``git cat-file``.

    The ref is resolved on construction so an unknown ref fails before any
    scanning starts.
    """

    def __init__(self, root: Path, ref: str) -> None:
        self.root = root
        self.label = ref
        self.commit = resolve_ref(root, ref)
        self._blobs: Optional[Dict[str, str]] = None

    def _tree(self) -> Dict[str, str]:
        if self._blobs is None:
            self._blobs = dict(list_tree(self.root, self.commit))
        return self._blobs

    def candidates(self, walker: FileWalker) -> Iterator[str]:
        return walker.filter_paths(walk_order(self._tree()))

    def read_bytes(self, path: str) -> bytes:
        return read_blob(self.root, self._tree()[path])
