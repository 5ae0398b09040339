"""Starter .todox.toml template written by ``todox init``."""

DEFAULT_TOML = """\
# todox configuration
version = "1.0"

# Tags recognised in comments (case-insensitive in source, reported uppercase)
tags = ["TODO", "FIXME", "HACK", "XXX", "BUG", "NOTE"]

# Directory names skipped at any depth
exclude_dirs = [".git", "node_modules", "target", "__pycache__", ".venv", "venv"]

# Regular expressions matched against the relative file path
exclude_patterns = []

[scan]
# workers = 8        # thread pool size for per-file scanning
strict = false       # abort on unreadable files instead of skipping them

[check]
# max = 100          # fail when the total item count exceeds this
# max_new = 0        # fail when more items were added since --since
# block_tags = ["BUG"]

[lint]
require_colon = false
require_author = false
uppercase_tag = false
no_empty_message = false
# max_message_length = 120

[output]
# Unset means text, or json when CI=true
# format = "text"    # text | json | sarif | github | markdown
"""
