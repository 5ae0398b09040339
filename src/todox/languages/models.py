"""Comment syntax model — introducer tokens stored as strings, compiled lazily."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class CommentSyntax:
    """How comments are introduced in one family of source files.

    ``line`` holds line-comment introducers (``//``, ``#``), ``block`` holds
    ``(opener, terminator)`` pairs and ``continuation`` holds prefixes that
    only count at the start of a stripped line (the ``*`` inside a C block
    comment). ``string_quotes`` drives the best-effort string-literal guard.
    """

    id: str
    name: str
    extensions: List[str] = field(default_factory=list)
    filenames: List[str] = field(default_factory=list)
    line: List[str] = field(default_factory=list)
    block: List[Tuple[str, str]] = field(default_factory=list)
    continuation: List[str] = field(default_factory=list)
    string_quotes: str = '"'

    # --- cached compiled objects (not serialised) ---
    _compiled_introducers: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def introducers(self) -> List[str]:
        """Every token that can open a comment, longest first."""
        tokens = set(self.line)
        tokens.update(opener for opener, _ in self.block)
        return sorted(tokens, key=lambda t: (-len(t), t))

    @property
    def terminators(self) -> List[str]:
        return sorted({closer for _, closer in self.block}, key=lambda t: (-len(t), t))

    @property
    def compiled_introducers(self) -> Optional[re.Pattern[str]]:
        if not self.introducers:
            return None
        if self._compiled_introducers is None:
            self._compiled_introducers = re.compile(
                "|".join(re.escape(t) for t in self.introducers)
            )
        return self._compiled_introducers
