"""Snapshot builder — fans per-file scans out to a thread pool, merges in walk order."""

from __future__ import annotations

import concurrent.futures
from typing import TYPE_CHECKING, Dict, List, Optional

from todox.config.schema import TodoxConfig
from todox.items.models import Item, SkippedFile, Snapshot
from todox.languages.registry import SyntaxRegistry
from todox.scanner.engine import FileReadError, FileScan, FileScanner
from todox.scanner.walker import FileWalker

if TYPE_CHECKING:
    from todox.git.provider import TreeProvider


def _scan_one(scanner: FileScanner, path: str, strict: bool) -> FileScan:
    try:
        return scanner.scan_file(path)
    except FileReadError as exc:
        if strict and exc.reason != "binary":
            raise
        return FileScan(path=path, skipped=SkippedFile(path=path, reason=exc.reason))


def build_snapshot(
    provider: "TreeProvider",
    config: TodoxConfig,
    registry: SyntaxRegistry,
    *,
    workers: Optional[int] = None,
    strict: Optional[bool] = None,
) -> Snapshot:
    """Scan every candidate file of *provider* and return one Snapshot.

    Results are keyed by the walker's sequence index and reassembled in that
    order, so the snapshot never depends on worker completion order. Under
    *strict* the first unreadable file aborts the build with FileReadError.
    """
    walker = FileWalker(provider.root, config)
    scanner = FileScanner(provider, config.tags, registry)
    workers = workers if workers is not None else config.scan.workers
    strict = config.scan.strict if strict is None else strict

    results: Dict[int, FileScan] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_scan_one, scanner, path, strict): index
            for index, path in enumerate(provider.candidates(walker))
        }
        try:
            if strict and walker.unreadable_dirs:
                raise FileReadError(walker.unreadable_dirs[0], "unreadable", "cannot list directory")
            for future in concurrent.futures.as_completed(futures):
                results[futures[future]] = future.result()
        except FileReadError:
            for f in futures:
                f.cancel()
            raise

    items: List[Item] = []
    skipped: List[SkippedFile] = [SkippedFile(path=p, reason="unreadable") for p in walker.unreadable_dirs]
    skipped.extend(SkippedFile(path=p, reason="binary") for p in walker.skipped_binary)
    files_scanned = 0
    for index in sorted(results):
        scan = results[index]
        if scan.skipped is not None:
            skipped.append(scan.skipped)
            continue
        files_scanned += 1
        items.extend(scan.items)

    return Snapshot(
        items=tuple(items),
        files_scanned=files_scanned,
        ref=provider.label,
        skipped_files=tuple(skipped),
    )
