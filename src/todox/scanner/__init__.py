"""Scanner — tag grammar, file walker, per-file engine, snapshot builder."""

from todox.scanner.engine import FileReadError, FileScanner, scan_content
from todox.scanner.grammar import ParsedTag, TagGrammar, extract_issue_ref
from todox.scanner.snapshot import build_snapshot
from todox.scanner.walker import FileWalker, is_binary

__all__ = [
    "FileReadError",
    "FileScanner",
    "FileWalker",
    "ParsedTag",
    "TagGrammar",
    "build_snapshot",
    "extract_issue_ref",
    "is_binary",
    "scan_content",
]
