"""Built-in comment syntaxes — aggregate all families plus the fallback."""

from todox.languages.builtin.c_family import ALL_C_FAMILY
from todox.languages.builtin.markup import ALL_MARKUP
from todox.languages.builtin.scripting import ALL_SCRIPTING
from todox.languages.models import CommentSyntax

# Used for any file no other syntax claims (``.txt``, extensionless files).
GENERIC = CommentSyntax(
    id="generic",
    name="Generic",
    line=["//", "#", "--"],
    block=[("/*", "*/"), ("<!--", "-->")],
    continuation=["*"],
)

ALL_BUILTIN_SYNTAXES: list[CommentSyntax] = [
    *ALL_C_FAMILY,
    *ALL_SCRIPTING,
    *ALL_MARKUP,
]

__all__ = ["ALL_BUILTIN_SYNTAXES", "GENERIC"]
