"""Tests for lint rules — checks that need the tagged line as written."""

from todox.config.schema import LintConfig, TodoxConfig
from todox.gate.lint import LINT_RULES, run_lint
from todox.git.provider import WorkingTreeProvider
from todox.scanner.engine import FileScanner
from todox.scanner.snapshot import build_snapshot


def _lint(root, registry, lint_config: LintConfig):
    cfg = TodoxConfig(lint=lint_config)
    provider = WorkingTreeProvider(root)
    snap = build_snapshot(provider, cfg, registry)
    return run_lint(snap, FileScanner(provider, cfg.tags, registry), lint_config)


SOURCE = """\
// TODO: has colon
// TODO no colon
// todo(dave): lowercase with author
// FIXME:
"""


class TestRules:
    def test_defaults_report_nothing(self, write_tree, registry):
        result = _lint(write_tree({"a.rs": SOURCE}), registry, LintConfig())
        assert result.passed
        assert result.total == 4

    def test_require_colon(self, write_tree, registry):
        result = _lint(write_tree({"a.rs": SOURCE}), registry, LintConfig(require_colon=True))
        assert [(v.rule, v.line) for v in result.violations] == [("require_colon", 2)]
        assert result.violations[0].message == "TODO must be followed by ':'"

    def test_require_author(self, write_tree, registry):
        result = _lint(write_tree({"a.rs": SOURCE}), registry, LintConfig(require_author=True))
        assert [v.line for v in result.violations] == [1, 2, 4]

    def test_uppercase_tag(self, write_tree, registry):
        result = _lint(write_tree({"a.rs": SOURCE}), registry, LintConfig(uppercase_tag=True))
        assert [(v.rule, v.line) for v in result.violations] == [("uppercase_tag", 3)]
        assert result.violations[0].message == "tag 'todo' should be written 'TODO'"

    def test_no_empty_message(self, write_tree, registry):
        result = _lint(write_tree({"a.rs": SOURCE}), registry, LintConfig(no_empty_message=True))
        assert [(v.rule, v.file, v.line) for v in result.violations] == [
            ("no_empty_message", "a.rs", 4)
        ]

    def test_max_message_length(self, write_tree, registry):
        result = _lint(write_tree({"a.rs": SOURCE}), registry, LintConfig(max_message_length=10))
        assert [v.line for v in result.violations] == [3]

    def test_violations_follow_item_order_then_rule_order(self, write_tree, registry):
        cfg = LintConfig(require_colon=True, require_author=True, uppercase_tag=True)
        result = _lint(write_tree({"a.rs": SOURCE}), registry, cfg)
        assert [(v.line, v.rule) for v in result.violations] == [
            (1, "require_author"),
            (2, "require_colon"),
            (2, "require_author"),
            (3, "uppercase_tag"),
            (4, "require_author"),
        ]

    def test_form_feed_does_not_shift_lines(self, write_tree, registry):
        root = write_tree({"notes.txt": "a\x0cb\n// TODO no colon\nc\x1cd\n// FIXME: fine\n"})
        result = _lint(root, registry, LintConfig(require_colon=True))
        assert [(v.line, v.rule) for v in result.violations] == [(2, "require_colon")]

    def test_rule_names(self):
        assert list(LINT_RULES) == [
            "require_colon",
            "require_author",
            "uppercase_tag",
            "no_empty_message",
            "max_message_length",
        ]
