"""Hash- and dash-commented languages: scripts, configs, SQL, Lisps."""

from todox.languages.models import CommentSyntax

PYTHON = CommentSyntax(
    id="python",
    name="Python",
    extensions=[".py", ".pyi", ".pyx"],
    line=["#"],
    string_quotes="\"'",
)

SHELL = CommentSyntax(
    id="shell",
    name="Shell",
    extensions=[".sh", ".bash", ".zsh", ".fish", ".ps1"],
    filenames=["Dockerfile", "Makefile", "Containerfile", ".bashrc", ".zshrc"],
    line=["#"],
    string_quotes="\"'",
)

RUBY_PERL = CommentSyntax(
    id="ruby",
    name="Ruby / Perl / R",
    extensions=[".rb", ".rake", ".pl", ".pm", ".r"],
    filenames=["Gemfile", "Rakefile"],
    line=["#"],
    string_quotes="\"'",
)

CONFIG = CommentSyntax(
    id="config",
    name="YAML / TOML / INI / env",
    extensions=[".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf", ".env", ".properties"],
    filenames=[".gitignore", ".dockerignore", ".editorconfig"],
    line=["#", ";"],
    string_quotes="\"'",
)

SQL_LUA = CommentSyntax(
    id="sql",
    name="SQL / Lua / Haskell",
    extensions=[".sql", ".lua", ".hs", ".elm"],
    line=["--"],
    block=[("/*", "*/"), ("{-", "-}"), ("--[[", "]]")],
    string_quotes="'",
)

LISP = CommentSyntax(
    id="lisp",
    name="Lisp / Clojure / Assembly",
    extensions=[".lisp", ".el", ".clj", ".cljs", ".scm", ".asm", ".s"],
    line=[";"],
)

ERLANG_TEX = CommentSyntax(
    id="erlang",
    name="Erlang / TeX / MATLAB",
    extensions=[".erl", ".hrl", ".tex", ".sty", ".m4"],
    line=["%"],
)

ALL_SCRIPTING = [PYTHON, SHELL, RUBY_PERL, CONFIG, SQL_LUA, LISP, ERLANG_TEX]
