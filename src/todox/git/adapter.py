"""Git subprocess wrapper — repo root, ref resolution, tree listing, blobs."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple


class ProviderError(Exception):
    """Raised when git is unavailable or cannot resolve the requested tree."""


def _run_git_bytes(args: list[str], cwd: Path, timeout: int = 30) -> bytes:
    """Run a git command and return raw stdout. Raises ProviderError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ProviderError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise ProviderError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise ProviderError(f"git {' '.join(args)} failed: {stderr}")
    return result.stdout


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    return _run_git_bytes(args, cwd, timeout).decode("utf-8", errors="replace")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the git repository containing *cwd*."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def resolve_ref(cwd: Path, ref: str) -> str:
    """Return the commit id *ref* points at."""
    if not ref or ref.startswith("-"):
        raise ProviderError(f"invalid git ref {ref!r}: must not be empty or start with '-'")
    try:
        out = _run_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=cwd)
    except ProviderError as exc:
        raise ProviderError(f"cannot resolve git ref {ref!r}") from exc
    return out.strip()


def list_tree(cwd: Path, commit: str) -> List[Tuple[str, str]]:
    """Return ``(path, blob_id)`` for every regular file of *commit* under *cwd*.

    Paths are relative to *cwd*; symlinks and submodules are left out.
    """
    out = _run_git_bytes(["ls-tree", "-r", "-z", commit], cwd=cwd)
    entries: List[Tuple[str, str]] = []
    for record in out.split(b"\x00"):
        if not record:
            continue
        meta, _, raw_path = record.partition(b"\t")
        mode, obj_type, obj_id = meta.decode("ascii").split()
        if obj_type != "blob" or mode == "120000":
            continue
        entries.append((raw_path.decode("utf-8", errors="surrogateescape"), obj_id))
    return entries


def read_blob(cwd: Path, blob_id: str) -> bytes:
    """Return the raw content of one blob."""
    return _run_git_bytes(["cat-file", "blob", blob_id], cwd=cwd)


def list_worktree_files(cwd: Path) -> List[str]:
    """Return tracked and untracked-but-not-ignored paths under *cwd*.

    ``.gitignore``, ``.git/info/exclude`` and the global excludes file all
    apply. Paths are relative to *cwd*; a tracked file deleted from disk is
    still listed.
    """
    out = _run_git_bytes(
        ["ls-files", "--cached", "--others", "--exclude-standard", "-z"], cwd=cwd
    )
    seen = set()
    paths: List[str] = []
    for raw in out.split(b"\x00"):
        if not raw:
            continue
        path = raw.decode("utf-8", errors="surrogateescape")
        if path not in seen:
            seen.add(path)
            paths.append(path)
    return paths
