"""Tag grammar — recognises a tagged comment on a single line.

Accepted shape, after a comment introducer of the file's syntax::

    TAG[!|!!][(author)][!|!!][:] message

The tag is matched case-insensitively and reported uppercase. A missing colon
is not a parse failure; ``ParsedTag.has_colon`` records it for lint. The
message may also open with ``!`` / ``!!`` followed by a space, which sets the
priority when no bang followed the tag.

Tags inside string literals are skipped on a best-effort basis: an
introducer preceded by an unterminated quote (per the syntax's
``string_quotes``) is ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from todox.items.models import Priority
from todox.languages.models import CommentSyntax

_ISSUE_REF_RE = re.compile(r"(?<![\w#])#(\d+)\b|\b([A-Z][A-Z0-9]*-\d+)\b")

_LEADING_BANG_RE = re.compile(r"^(!{1,2})(?:\s+|$)")

# Repeated introducer characters: ``///``, ``//!``, ``/**``, ``##``, ``---``
_DECORATION = r"[/*#!;%-]*"


def extract_issue_ref(message: str) -> Optional[str]:
    """Return the first ``#123`` or ``ABC-123`` reference in *message*."""
    m = _ISSUE_REF_RE.search(message)
    if m is None:
        return None
    if m.group(1) is not None:
        return f"#{m.group(1)}"
    return m.group(2)


@dataclass(frozen=True)
class ParsedTag:
    """Fields isolated from one tagged line, before it becomes an Item."""

    tag: str
    raw_tag: str  # as written in the source
    message: str
    author: Optional[str]
    issue_ref: Optional[str]
    priority: Priority
    has_colon: bool


class TagGrammar:
    """Pure line parser for one (tag set, comment syntax) pair."""

    def __init__(self, tags: Iterable[str], syntax: CommentSyntax) -> None:
        self.tags = tuple(t.upper() for t in tags)
        self.syntax = syntax
        alternation = "|".join(
            re.escape(t) for t in sorted(self.tags, key=lambda t: (-len(t), t))
        )
        self._tag_re = re.compile(
            _DECORATION
            + r"\s*(?P<tag>" + alternation + r")(?!\w)"
            r"(?P<bang>!{1,2})?"
            r"(?:\((?P<author>[^()]*)\))?"
            r"(?P<bang_after>!{1,2})?"
            r"\s*(?P<colon>:)?"
            r"(?P<rest>.*)$",
            re.IGNORECASE,
        )
        self._closers = {opener: closer for opener, closer in syntax.block}

    def parse_line(self, line: str) -> Optional[ParsedTag]:
        """Return the tagged comment on *line*, or None."""
        stripped = line.lstrip()
        for prefix in self.syntax.continuation:
            if stripped.startswith(prefix):
                m = self._tag_re.match(stripped, len(prefix))
                if m is not None:
                    return self._build(m, self.syntax.terminators)

        intro_re = self.syntax.compiled_introducers
        if intro_re is None:
            return None

        in_comment = False
        for intro in intro_re.finditer(line):
            if not in_comment and self._inside_string(line, intro.start()):
                continue
            m = self._tag_re.match(line, intro.end())
            if m is not None:
                closer = self._closers.get(intro.group())
                return self._build(m, [closer] if closer else [])
            in_comment = True
        return None

    def _inside_string(self, line: str, pos: int) -> bool:
        quotes = self.syntax.string_quotes
        if not quotes:
            return False
        open_quote: Optional[str] = None
        escaped = False
        for ch in line[:pos]:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif open_quote is not None:
                if ch == open_quote:
                    open_quote = None
            elif ch in quotes:
                open_quote = ch
        return open_quote is not None

    def _build(self, m: re.Match[str], terminators: Iterable[str]) -> ParsedTag:
        rest = m.group("rest")
        for closer in terminators:
            idx = rest.find(closer)
            if idx != -1:
                rest = rest[:idx]
        rest = rest.strip()

        bangs = m.group("bang") or m.group("bang_after")
        if bangs is None:
            lead = _LEADING_BANG_RE.match(rest)
            if lead is not None:
                bangs = lead.group(1)
                rest = rest[lead.end():]

        author = m.group("author")
        author = author.strip() if author else None
        message = rest.strip()

        return ParsedTag(
            tag=m.group("tag").upper(),
            raw_tag=m.group("tag"),
            message=message,
            author=author or None,
            issue_ref=extract_issue_ref(message),
            priority=Priority.from_bangs(bangs),
            has_colon=m.group("colon") is not None,
        )
