"""Tests for the CLI commands."""

import json
from pathlib import Path

import pytest
from conftest import git
from typer.testing import CliRunner

from todox import __version__
from todox.cli import app

runner = CliRunner()


@pytest.fixture
def project(write_tree) -> Path:
    return write_tree({
        "a.txt": "one\ntwo\n// FIXME(alice): handle #42\n",
        "b.txt": "nothing here\n",
    })


def _json(result) -> dict:
    return json.loads(result.stdout)


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"todox {__version__}" in result.output


class TestList:
    def test_json_scenario(self, project: Path):
        result = runner.invoke(app, ["list", "--root", str(project), "--format", "json"])
        assert result.exit_code == 0
        data = _json(result)
        assert data["files_scanned"] == 2
        assert data["items"] == [
            {
                "file": "a.txt",
                "line": 3,
                "tag": "FIXME",
                "message": "handle #42",
                "author": "alice",
                "issue_ref": "#42",
                "priority": "normal",
            }
        ]

    def test_text_output(self, project: Path):
        result = runner.invoke(app, ["list", "--root", str(project)])
        assert result.exit_code == 0
        assert "L3: [FIXME] handle #42" in result.stdout
        assert "1 items in 1 files (2 files scanned)" in result.stdout

    def test_tag_filter(self, write_tree):
        root = write_tree({"a.rs": "// TODO: keep\n// NOTE: drop\n// BUG: keep too\n"})
        result = runner.invoke(
            app, ["list", "-r", str(root), "-f", "json", "--tag", "todo", "--tag", "bug"]
        )
        assert result.exit_code == 0
        assert [i["tag"] for i in _json(result)["items"]] == ["TODO", "BUG"]

    def test_comma_separated_tag_filter(self, write_tree):
        root = write_tree({"a.rs": "// TODO: keep\n// NOTE: drop\n// BUG: keep too\n"})
        result = runner.invoke(app, ["list", "-r", str(root), "-f", "json", "--tag", "TODO,BUG"])
        assert [i["tag"] for i in _json(result)["items"]] == ["TODO", "BUG"]

    def test_unknown_tag_is_argument_error(self, project: Path):
        result = runner.invoke(app, ["list", "-r", str(project), "--tag", "NOPE"])
        assert result.exit_code == 2

    def test_ls_alias(self, project: Path):
        result = runner.invoke(app, ["ls", "-r", str(project), "-f", "json"])
        assert result.exit_code == 0
        assert len(_json(result)["items"]) == 1

    def test_github_format(self, project: Path):
        result = runner.invoke(app, ["list", "-r", str(project), "-f", "github"])
        assert result.exit_code == 0
        assert "::notice file=a.txt,line=3::[FIXME] handle #42" in result.stdout

    def test_sarif_format(self, project: Path):
        result = runner.invoke(app, ["list", "-r", str(project), "-f", "sarif"])
        assert result.exit_code == 0
        assert _json(result)["version"] == "2.1.0"

    def test_markdown_format(self, project: Path):
        result = runner.invoke(app, ["list", "-r", str(project), "-f", "markdown"])
        assert result.exit_code == 0
        assert "| a.txt | 3 | FIXME |  | handle #42 | alice | #42 |" in result.stdout
        assert "**1 items found**" in result.stdout

    def test_invalid_format(self, project: Path):
        result = runner.invoke(app, ["list", "-r", str(project), "-f", "xml"])
        assert result.exit_code == 2

    def test_missing_root(self, tmp_path: Path):
        result = runner.invoke(app, ["list", "-r", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_ci_defaults_to_json(self, project: Path, monkeypatch):
        monkeypatch.setenv("CI", "true")
        result = runner.invoke(app, ["list", "-r", str(project)])
        assert result.exit_code == 0
        assert _json(result)["files_scanned"] == 2

    def test_configured_text_beats_ci(self, project: Path, monkeypatch):
        monkeypatch.setenv("CI", "true")
        (project / ".todox.toml").write_text('[output]\nformat = "text"\n')
        result = runner.invoke(app, ["list", "-r", str(project)])
        assert result.exit_code == 0
        assert "1 items in 1 files" in result.stdout

    def test_format_flag_beats_ci(self, project: Path, monkeypatch):
        monkeypatch.setenv("CI", "true")
        result = runner.invoke(app, ["list", "-r", str(project), "-f", "text"])
        assert "1 items in 1 files" in result.stdout

    def test_config_error_exits_2(self, project: Path):
        (project / ".todox.toml").write_text('exclude_patterns = ["(bad"]\n')
        result = runner.invoke(app, ["list", "-r", str(project)])
        assert result.exit_code == 2

    def test_strict_unreadable_file_exits_2(self, project: Path):
        (project / "c.txt").write_bytes(b"\xff\xfe\n")
        assert runner.invoke(app, ["list", "-r", str(project)]).exit_code == 0
        assert runner.invoke(app, ["list", "-r", str(project), "--strict"]).exit_code == 2

    def test_jobs_option(self, project: Path):
        result = runner.invoke(app, ["list", "-r", str(project), "-f", "json", "-j", "2"])
        assert result.exit_code == 0
        assert _json(result)["files_scanned"] == 2


class TestCheck:
    def test_max_boundary(self, project: Path):
        assert runner.invoke(app, ["check", "-r", str(project), "--max", "1"]).exit_code == 0
        result = runner.invoke(app, ["check", "-r", str(project), "--max", "0", "-f", "json"])
        assert result.exit_code == 1
        assert _json(result) == {
            "passed": False,
            "total": 1,
            "violations": [{"rule": "max", "message": "Total items (1) exceeds max (0)"}],
        }

    def test_block_tags(self, write_tree):
        root = write_tree({"a.txt": "// BUG: one\n// TODO: fine\n// BUG: two\n"})
        result = runner.invoke(app, ["check", "-r", str(root), "--block-tags", "BUG", "-f", "json"])
        assert result.exit_code == 1
        assert [v["message"] for v in _json(result)["violations"]] == [
            "Blocked tag BUG found in a.txt:1",
            "Blocked tag BUG found in a.txt:3",
        ]

    def test_pass_without_rules(self, project: Path):
        result = runner.invoke(app, ["check", "-r", str(project), "-f", "json"])
        assert result.exit_code == 0
        assert _json(result) == {"passed": True, "total": 1, "violations": []}

    def test_rules_from_config(self, project: Path):
        (project / ".todox.toml").write_text('[check]\nblock_tags = ["fixme"]\n')
        assert runner.invoke(app, ["check", "-r", str(project)]).exit_code == 1

    def test_max_new_flag_requires_since(self, project: Path):
        result = runner.invoke(app, ["check", "-r", str(project), "--max-new", "0"])
        assert result.exit_code == 2

    def test_configured_max_new_skipped_without_since(self, project: Path):
        (project / ".todox.toml").write_text("[check]\nmax_new = 0\n")
        assert runner.invoke(app, ["check", "-r", str(project)]).exit_code == 0

    def test_max_new_since(self, tmp_git_repo: Path):
        (tmp_git_repo / "extra.rs").write_text("// TODO: added one\n// TODO: added two\n")
        args = ["check", "-r", str(tmp_git_repo), "--since", "HEAD", "-f", "json"]
        assert runner.invoke(app, [*args, "--max-new", "2"]).exit_code == 0
        result = runner.invoke(app, [*args, "--max-new", "1"])
        assert result.exit_code == 1
        assert _json(result)["violations"] == [
            {"rule": "max_new", "message": "New items (2) exceeds max_new (1)"}
        ]

    def test_bad_since_ref(self, tmp_git_repo: Path):
        result = runner.invoke(
            app, ["check", "-r", str(tmp_git_repo), "--since", "nope", "--max-new", "0"]
        )
        assert result.exit_code == 2

    def test_negative_max_rejected(self, project: Path):
        assert runner.invoke(app, ["check", "-r", str(project), "--max", "-1"]).exit_code == 2


class TestDiff:
    def test_json(self, tmp_git_repo: Path):
        (tmp_git_repo / "main.rs").write_text("// TODO: first task\nfn main() {}\n// HACK: new one\n")
        result = runner.invoke(app, ["diff", "HEAD", "-r", str(tmp_git_repo), "-f", "json"])
        assert result.exit_code == 0
        data = _json(result)
        assert [(e["status"], e["item"]["tag"]) for e in data["entries"]] == [
            ("added", "HACK"),
            ("removed", "FIXME"),
        ]
        assert (data["added_count"], data["removed_count"], data["base_ref"]) == (1, 1, "HEAD")

    def test_unchanged_tree_is_empty(self, tmp_git_repo: Path):
        result = runner.invoke(app, ["diff", "HEAD", "-r", str(tmp_git_repo), "-f", "json"])
        assert result.exit_code == 0
        assert _json(result)["entries"] == []

    def test_against_older_commit(self, tmp_git_repo: Path):
        (tmp_git_repo / "second.py").write_text("# TODO: from second commit\n")
        git(tmp_git_repo, "add", ".")
        git(tmp_git_repo, "commit", "-q", "-m", "second")
        result = runner.invoke(app, ["diff", "HEAD~1", "-r", str(tmp_git_repo)])
        assert result.exit_code == 0
        assert "+ second.py:1 [TODO] from second commit" in result.stdout
        assert "+1 -0 (base: HEAD~1)" in result.stdout

    def test_gitignored_files_not_added(self, tmp_git_repo: Path):
        (tmp_git_repo / ".gitignore").write_text("dist/\n")
        git(tmp_git_repo, "add", ".gitignore")
        git(tmp_git_repo, "commit", "-q", "-m", "ignore dist")
        (tmp_git_repo / "dist").mkdir()
        (tmp_git_repo / "dist" / "bundle.js").write_text("// TODO: generated\n")
        result = runner.invoke(app, ["diff", "HEAD", "-r", str(tmp_git_repo), "-f", "json"])
        assert result.exit_code == 0
        assert _json(result)["added_count"] == 0

    def test_tag_filter(self, tmp_git_repo: Path):
        (tmp_git_repo / "main.rs").write_text("// HACK: new one\n")
        result = runner.invoke(
            app, ["diff", "HEAD", "-r", str(tmp_git_repo), "-f", "json", "--tag", "FIXME"]
        )
        data = _json(result)
        assert (data["added_count"], data["removed_count"]) == (0, 1)

    def test_unknown_ref_exits_2(self, tmp_git_repo: Path):
        result = runner.invoke(app, ["diff", "no-such-ref", "-r", str(tmp_git_repo)])
        assert result.exit_code == 2

    def test_not_a_git_repo(self, project: Path):
        assert runner.invoke(app, ["diff", "HEAD", "-r", str(project)]).exit_code == 2


class TestLint:
    def test_violations_exit_1(self, write_tree):
        root = write_tree({"a.rs": "// TODO no colon\n// TODO: fine\n"})
        result = runner.invoke(app, ["lint", "-r", str(root), "--require-colon", "-f", "json"])
        assert result.exit_code == 1
        data = _json(result)
        assert data["violations"] == [
            {
                "rule": "require_colon",
                "file": "a.rs",
                "line": 1,
                "message": "TODO must be followed by ':'",
            }
        ]

    def test_clean_exit_0(self, project: Path):
        assert runner.invoke(app, ["lint", "-r", str(project), "--require-author"]).exit_code == 0


class TestBrief:
    def test_json(self, write_tree):
        root = write_tree({"a.rs": "// TODO!!: fix race\n// NOTE: fyi\n"})
        result = runner.invoke(app, ["brief", "-r", str(root), "-f", "json"])
        assert result.exit_code == 0
        data = _json(result)
        assert data["priority_counts"] == {"normal": 1, "high": 0, "urgent": 1}
        assert data["top_urgent"]["message"] == "fix race"

    def test_trend_since(self, tmp_git_repo: Path):
        result = runner.invoke(app, ["brief", "-r", str(tmp_git_repo), "--since", "HEAD", "-f", "json"])
        assert result.exit_code == 0
        assert _json(result)["trend"] == {"added": 0, "removed": 0, "base_ref": "HEAD"}

    def test_sarif_not_supported(self, project: Path):
        assert runner.invoke(app, ["brief", "-r", str(project), "-f", "sarif"]).exit_code == 2


class TestStats:
    def test_json(self, write_tree):
        root = write_tree({
            "a.rs": "// TODO(bob): one\n// TODO!: two\n",
            "b.py": "# FIXME(bob): three\n",
        })
        result = runner.invoke(app, ["stats", "-r", str(root), "-f", "json"])
        assert result.exit_code == 0
        data = _json(result)
        assert data["tag_counts"] == [{"tag": "TODO", "count": 2}, {"tag": "FIXME", "count": 1}]
        assert data["author_counts"] == [{"author": "bob", "count": 2}]
        assert data["hotspot_files"][0] == {"file": "a.rs", "count": 2}
        assert data["priority_counts"] == {"normal": 2, "high": 1, "urgent": 0}

    def test_text(self, project: Path):
        result = runner.invoke(app, ["stats", "-r", str(project)])
        assert result.exit_code == 0
        assert "1 items across 1 files" in result.stdout

    def test_markdown(self, project: Path):
        result = runner.invoke(app, ["stats", "-r", str(project), "-f", "markdown"])
        assert result.exit_code == 0
        assert "| FIXME | 1 |" in result.stdout

    def test_trend_since(self, tmp_git_repo: Path):
        (tmp_git_repo / "extra.rs").write_text("// NOTE: added\n")
        result = runner.invoke(app, ["stats", "-r", str(tmp_git_repo), "--since", "HEAD", "-f", "json"])
        assert result.exit_code == 0
        assert _json(result)["trend"] == {"added": 1, "removed": 0, "base_ref": "HEAD"}

    def test_sarif_not_supported(self, project: Path):
        assert runner.invoke(app, ["stats", "-r", str(project), "-f", "sarif"]).exit_code == 2


class TestInit:
    def test_creates_config(self, tmp_path: Path):
        result = runner.invoke(app, ["init", "--root", str(tmp_path)])
        assert result.exit_code == 0
        assert (tmp_path / ".todox.toml").exists()

    def test_refuses_overwrite(self, tmp_path: Path):
        (tmp_path / ".todox.toml").write_text("existing")
        result = runner.invoke(app, ["init", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert (tmp_path / ".todox.toml").read_text() == "existing"
