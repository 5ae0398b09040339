"""C-style languages — ``//`` line comments and ``/* */`` blocks."""

from todox.languages.models import CommentSyntax

C_LIKE = CommentSyntax(
    id="c",
    name="C / C++ / Objective-C",
    extensions=[".c", ".h", ".cc", ".cpp", ".cxx", ".hpp", ".hh", ".m", ".mm"],
    line=["//"],
    block=[("/*", "*/")],
    continuation=["*"],
)

JVM = CommentSyntax(
    id="jvm",
    name="Java / Kotlin / Scala / Groovy",
    extensions=[".java", ".kt", ".kts", ".scala", ".groovy", ".gradle"],
    line=["//"],
    block=[("/*", "*/")],
    continuation=["*"],
)

JAVASCRIPT = CommentSyntax(
    id="javascript",
    name="JavaScript / TypeScript",
    extensions=[".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"],
    line=["//"],
    block=[("/*", "*/")],
    continuation=["*"],
    string_quotes="\"'`",
)

RUST = CommentSyntax(
    id="rust",
    name="Rust",
    extensions=[".rs"],
    line=["//"],
    block=[("/*", "*/")],
    continuation=["*"],
)

GO = CommentSyntax(
    id="go",
    name="Go",
    extensions=[".go"],
    line=["//"],
    block=[("/*", "*/")],
    string_quotes="\"`",
)

C_SHARP_SWIFT = CommentSyntax(
    id="csharp",
    name="C# / Swift / Dart",
    extensions=[".cs", ".swift", ".dart"],
    line=["//"],
    block=[("/*", "*/")],
    continuation=["*"],
)

STYLESHEETS = CommentSyntax(
    id="css",
    name="CSS / SCSS / Less",
    extensions=[".css", ".scss", ".sass", ".less"],
    line=["//"],
    block=[("/*", "*/")],
    continuation=["*"],
    string_quotes="\"'",
)

PHP = CommentSyntax(
    id="php",
    name="PHP",
    extensions=[".php"],
    line=["//", "#"],
    block=[("/*", "*/")],
    continuation=["*"],
    string_quotes="\"'",
)

ALL_C_FAMILY = [C_LIKE, JVM, JAVASCRIPT, RUST, GO, C_SHARP_SWIFT, STYLESHEETS, PHP]
