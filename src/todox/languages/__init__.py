"""Comment syntaxes — models, registry, built-in language table."""

from todox.languages.models import CommentSyntax
from todox.languages.registry import SyntaxRegistry, build_registry

__all__ = ["CommentSyntax", "SyntaxRegistry", "build_registry"]
