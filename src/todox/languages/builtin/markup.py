"""Markup languages — ``<!-- -->`` blocks and template comments."""

from todox.languages.models import CommentSyntax

HTML = CommentSyntax(
    id="html",
    name="HTML / XML / Markdown",
    extensions=[".html", ".htm", ".xml", ".svg", ".vue", ".svelte", ".md", ".markdown"],
    line=["//"],
    block=[("<!--", "-->"), ("/*", "*/")],
    string_quotes="\"",
)

TEMPLATES = CommentSyntax(
    id="templates",
    name="Jinja / Django / Handlebars",
    extensions=[".j2", ".jinja", ".jinja2", ".hbs", ".mustache"],
    block=[("{#", "#}"), ("{{!--", "--}}"), ("{{!", "}}"), ("<!--", "-->")],
)

ALL_MARKUP = [HTML, TEMPLATES]
