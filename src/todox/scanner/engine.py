"""Per-file scanner — turns one file's content into ordered Items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from todox.git.adapter import ProviderError
from todox.items.models import Item, SkippedFile
from todox.languages.registry import SyntaxRegistry
from todox.scanner.grammar import TagGrammar
from todox.scanner.walker import is_binary

if TYPE_CHECKING:
    from todox.git.provider import TreeProvider


class FileReadError(Exception):
    """Raised when one file cannot be read or decoded. Never fatal on its own."""

    def __init__(self, path: str, reason: str, detail: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}{f' ({detail})' if detail else ''}")


@dataclass(frozen=True)
class FileScan:
    """Result of scanning a single file. ``skipped`` is set when it was dropped."""

    path: str
    items: Sequence[Item] = ()
    skipped: Optional[SkippedFile] = None


def decode_content(data: bytes, path: str) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileReadError(path, "encoding", str(exc)) from exc


def split_lines(content: str) -> List[str]:
    """Split *content* into physical lines.

    Lines end at ``\\n`` (one trailing ``\\r`` is dropped). Form feeds and the
    other separators ``str.splitlines`` honours stay inside their line.
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def scan_content(content: str, file_path: str, grammar: TagGrammar) -> List[Item]:
    """Scan *content* line by line. Each physical line is parsed on its own."""
    items: List[Item] = []
    for line_no, line in enumerate(split_lines(content), start=1):
        parsed = grammar.parse_line(line)
        if parsed is None:
            continue
        items.append(
            Item(
                file=file_path,
                line=line_no,
                tag=parsed.tag,
                message=parsed.message,
                author=parsed.author,
                issue_ref=parsed.issue_ref,
                priority=parsed.priority,
            )
        )
    return items


class FileScanner:
    """Reads files through a provider and applies the grammar for each path.

    One ``TagGrammar`` is built per comment syntax and reused across files.
    """

    def __init__(self, provider: "TreeProvider", tags: Sequence[str], registry: SyntaxRegistry) -> None:
        self.provider = provider
        self.tags = tuple(tags)
        self.registry = registry
        self._grammars: dict[str, TagGrammar] = {}

    def grammar_for(self, path: str) -> TagGrammar:
        syntax = self.registry.for_path(path)
        grammar = self._grammars.get(syntax.id)
        if grammar is None:
            grammar = TagGrammar(self.tags, syntax)
            self._grammars[syntax.id] = grammar
        return grammar

    def read_text(self, path: str) -> str:
        """Return the decoded content of *path*. Raises FileReadError."""
        try:
            data = self.provider.read_bytes(path)
        except (OSError, KeyError, ProviderError) as exc:
            raise FileReadError(path, "unreadable", str(exc)) from exc
        if is_binary(data):
            raise FileReadError(path, "binary")
        return decode_content(data, path)

    def scan_file(self, path: str) -> FileScan:
        content = self.read_text(path)
        return FileScan(path=path, items=scan_content(content, path, self.grammar_for(path)))
