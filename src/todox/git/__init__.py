"""Git interface layer — subprocess adapter and tree providers."""

from todox.git.adapter import (
    ProviderError,
    get_repo_root,
    list_tree,
    read_blob,
    resolve_ref,
)
from todox.git.provider import GitRefProvider, TreeProvider, WorkingTreeProvider

__all__ = [
    "GitRefProvider",
    "ProviderError",
    "TreeProvider",
    "WorkingTreeProvider",
    "get_repo_root",
    "list_tree",
    "read_blob",
    "resolve_ref",
]
