"""Shared test fixtures — project trees, items, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Dict

import pytest

from todox.config.schema import TodoxConfig
from todox.items.models import Item, Priority, Snapshot
from todox.languages.registry import build_registry


def make_item(
    file: str = "a.rs",
    line: int = 1,
    tag: str = "TODO",
    message: str = "do something",
    **kwargs,
) -> Item:
    return Item(file=file, line=line, tag=tag, message=message, **kwargs)


def make_snapshot(*items: Item, files_scanned: int = 1, ref: str = "WORKTREE") -> Snapshot:
    return Snapshot(items=tuple(items), files_scanned=files_scanned, ref=ref)


def git(cwd: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    ).stdout


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep CI auto-detection and TODOX_* overrides out of every test."""
    for name in (
        "CI",
        "TODOX_TAGS",
        "TODOX_FORMAT",
        "TODOX_MAX",
        "TODOX_MAX_NEW",
        "TODOX_BLOCK_TAGS",
        "TODOX_EXCLUDE_DIRS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Write ``{relative_path: content}`` under tmp_path and return the root."""

    def _write(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def config() -> TodoxConfig:
    return TodoxConfig()


@pytest.fixture
def registry(tmp_path: Path):
    return build_registry(tmp_path)


@pytest.fixture
def urgent_item() -> Item:
    return make_item(file="src/race.rs", line=7, tag="BUG", message="fix race", priority=Priority.URGENT)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one committed file."""
    git(tmp_path, "init", "-q")
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "main.rs").write_text(
        "// TODO: first task\nfn main() {}\n// FIXME: broken thing\n",
        encoding="utf-8",
    )
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-q", "-m", "initial")
    return tmp_path
