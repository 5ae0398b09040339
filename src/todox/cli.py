"""todox CLI — Typer application with list, diff, check, lint, brief, stats, and init commands."""

from __future__ import annotations

import dataclasses
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape

from todox import __version__

if TYPE_CHECKING:
    from todox.config.schema import TodoxConfig
    from todox.languages.registry import SyntaxRegistry

app = typer.Typer(
    name="todox",
    help="Track TODO/FIXME/HACK comments across git revisions and gate them in CI.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

ROOT_OPTION = typer.Option(Path("."), "--root", "-r", help="Directory to scan")
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to .todox.toml")
FORMAT_OPTION = typer.Option(None, "--format", "-f", help="Output format: text | json | markdown | sarif | github")
JOBS_OPTION = typer.Option(None, "--jobs", "-j", help="Worker threads for scanning")
STRICT_OPTION = typer.Option(False, "--strict", help="Abort on unreadable files instead of skipping them")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Verbose output")
DEBUG_OPTION = typer.Option(False, "--debug", help="Debug output with timing")


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _fatal(label: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=2)


@dataclasses.dataclass(frozen=True)
class _Session:
    root: Path
    config: TodoxConfig
    registry: SyntaxRegistry
    format: str
    verbose: bool
    debug: bool

    def note(self, message: str) -> None:
        if self.verbose or self.debug:
            console.print(f"[dim]{escape(message)}[/dim]")


def _open_session(
    root: Path,
    config_path: Optional[str],
    fmt: Optional[str],
    jobs: Optional[int],
    strict: bool,
    verbose: bool,
    debug: bool,
    *,
    formats: Tuple[str, ...] = ("text", "json", "markdown", "sarif", "github"),
) -> _Session:
    """Load config, apply CLI overrides, and build the syntax registry.

    Everything that can fail with a ConfigError happens here, before any file
    is scanned.
    """
    from todox.config.loader import ConfigError, load_config, validate_config
    from todox.languages.registry import build_registry

    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] not a directory: {escape(str(root))}")
        raise typer.Exit(code=2)
    root = root.resolve()

    try:
        cfg = load_config(root, config_path)
        if jobs is not None or strict:
            cfg = validate_config(
                dataclasses.replace(
                    cfg,
                    scan=dataclasses.replace(
                        cfg.scan,
                        workers=jobs if jobs is not None else cfg.scan.workers,
                        strict=strict or cfg.scan.strict,
                    ),
                )
            )
        registry = build_registry(root)
    except ConfigError as exc:
        raise _fatal("Config error", exc) from exc

    # --- Output format: flag > config > CI default > text ---
    if fmt is None:
        fmt = cfg.output.format or ("json" if _detect_ci() else "text")
    if fmt not in formats:
        console.print(f"[bold red]Invalid format:[/bold red] {escape(fmt)}")
        raise typer.Exit(code=2)

    session = _Session(root=root, config=cfg, registry=registry, format=fmt, verbose=verbose, debug=debug)
    session.note(f"Root: {root}")
    session.note(f"Tags: {', '.join(cfg.tags)}")
    session.note(f"Comment syntaxes loaded: {len(registry.all_syntaxes)}")
    return session


def _check_tags(session: _Session, tags: Optional[List[str]]) -> List[str]:
    """Normalise --tag filters; unknown tags are an argument error."""
    wanted = [t.upper() for raw in (tags or []) for t in raw.split(",") if t.strip()]
    unknown = [t for t in wanted if t not in session.config.tags]
    if unknown:
        console.print(f"[bold red]Unknown tag:[/bold red] {escape(', '.join(unknown))}")
        raise typer.Exit(code=2)
    return wanted


def _base_provider(session: _Session, ref: str):
    """Resolve *ref* before any scanning so a bad ref fails fast."""
    from todox.git.adapter import ProviderError
    from todox.git.provider import GitRefProvider

    try:
        return GitRefProvider(session.root, ref)
    except ProviderError as exc:
        raise _fatal("Git error", exc) from exc


def _snapshot(session: _Session, provider=None):
    """Build a snapshot of the working tree (or of *provider*)."""
    from todox.git.adapter import ProviderError
    from todox.git.provider import WorkingTreeProvider
    from todox.scanner.engine import FileReadError
    from todox.scanner.snapshot import build_snapshot

    provider = provider or WorkingTreeProvider(session.root)
    start = time.perf_counter()
    try:
        snap = build_snapshot(provider, session.config, session.registry)
    except FileReadError as exc:
        raise _fatal("Read error", exc) from exc
    except ProviderError as exc:
        raise _fatal("Git error", exc) from exc

    session.note(f"[{snap.ref}] files scanned: {snap.files_scanned}, items: {snap.total}")
    for skipped in snap.skipped_files:
        session.note(f"  skipped {skipped.path} ({skipped.reason})")
    if session.debug:
        console.print(f"[dim]{escape(f'[{snap.ref}]')} scan duration: {(time.perf_counter() - start) * 1000:.0f}ms[/dim]")
    return snap


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


# ── list ──────────────────────────────────────────────────────────────────────


@app.command("list")
def list_items(
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Only show these tags"),
    root: Path = ROOT_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    format: Optional[str] = FORMAT_OPTION,
    jobs: Optional[int] = JOBS_OPTION,
    strict: bool = STRICT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """List every tagged comment in the tree."""
    from todox.output import github, json_report, markdown, sarif, terminal

    session = _open_session(root, config, format, jobs, strict, verbose, debug)
    tags = _check_tags(session, tag)
    snap = _snapshot(session)
    if tags:
        snap = snap.filter_tags(tags)

    if session.format == "json":
        print(json_report.render_list(snap))
    elif session.format == "sarif":
        print(sarif.render(sarif.list_to_dict(snap)))
    elif session.format == "markdown":
        _print_lines(markdown.format_list(snap))
    elif session.format == "github":
        _print_lines(github.format_list(snap))
    else:
        terminal.render_list(snap)


app.command("ls", hidden=True, help="Alias for list.")(list_items)


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    git_ref: str = typer.Argument(..., help="Base git ref to compare the working tree against"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Only compare these tags"),
    root: Path = ROOT_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    format: Optional[str] = FORMAT_OPTION,
    jobs: Optional[int] = JOBS_OPTION,
    strict: bool = STRICT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show items added and removed since GIT_REF."""
    from todox.items.differ import compute_diff
    from todox.output import github, json_report, markdown, sarif, terminal

    session = _open_session(root, config, format, jobs, strict, verbose, debug)
    tags = _check_tags(session, tag)
    base_provider = _base_provider(session, git_ref)

    head = _snapshot(session)
    base = _snapshot(session, base_provider)
    result = compute_diff(base, head, tags=tags or None)

    if session.format == "json":
        print(json_report.render_diff(result))
    elif session.format == "sarif":
        print(sarif.render(sarif.diff_to_dict(result)))
    elif session.format == "markdown":
        _print_lines(markdown.format_diff(result))
    elif session.format == "github":
        _print_lines(github.format_diff(result))
    else:
        terminal.render_diff(result)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    max: Optional[int] = typer.Option(None, "--max", min=0, help="Fail when the total item count exceeds N"),
    block_tags: Optional[List[str]] = typer.Option(None, "--block-tags", help="Fail on any item with these tags"),
    max_new: Optional[int] = typer.Option(None, "--max-new", min=0, help="Fail when more than N items were added since --since"),
    since: Optional[str] = typer.Option(None, "--since", help="Base git ref for --max-new"),
    root: Path = ROOT_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    format: Optional[str] = FORMAT_OPTION,
    jobs: Optional[int] = JOBS_OPTION,
    strict: bool = STRICT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Evaluate quality-gate thresholds. Exits 1 when any rule fails."""
    from todox.gate.evaluator import GateRules, evaluate
    from todox.items.differ import compute_diff
    from todox.output import github, json_report, markdown, sarif, terminal

    session = _open_session(root, config, format, jobs, strict, verbose, debug)
    blocked = _check_tags(session, block_tags)
    rules = GateRules.resolve(session.config.check, max=max, block_tags=blocked, max_new=max_new)

    if since is None and rules.max_new is not None:
        if max_new is not None:
            console.print("[bold red]Error:[/bold red] --max-new requires --since <ref>")
            raise typer.Exit(code=2)
        session.note("check.max_new is configured but --since was not given; skipping max_new")
        rules = dataclasses.replace(rules, max_new=None)

    base_provider = _base_provider(session, since) if since is not None else None
    snap = _snapshot(session)
    diff_result = None
    if base_provider is not None:
        diff_result = compute_diff(_snapshot(session, base_provider), snap)

    result = evaluate(snap, rules, diff_result)

    if session.format == "json":
        print(json_report.render_check(result))
    elif session.format == "sarif":
        print(sarif.render(sarif.check_to_dict(result)))
    elif session.format == "markdown":
        _print_lines(markdown.format_check(result))
    elif session.format == "github":
        _print_lines(github.format_check(result))
    else:
        terminal.render_check(result)

    if not result.passed:
        raise typer.Exit(code=1)


# ── lint ──────────────────────────────────────────────────────────────────────


@app.command()
def lint(
    require_colon: bool = typer.Option(False, "--require-colon", help="Tags must be followed by ':'"),
    require_author: bool = typer.Option(False, "--require-author", help="Tags must carry an (author)"),
    uppercase_tag: bool = typer.Option(False, "--uppercase-tag", help="Tags must be written uppercase"),
    root: Path = ROOT_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    format: Optional[str] = FORMAT_OPTION,
    jobs: Optional[int] = JOBS_OPTION,
    strict: bool = STRICT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Check tagged comments against style rules. Exits 1 on violations."""
    from todox.gate.lint import run_lint
    from todox.git.provider import WorkingTreeProvider
    from todox.output import github, json_report, markdown, sarif, terminal
    from todox.scanner.engine import FileScanner

    session = _open_session(root, config, format, jobs, strict, verbose, debug)
    lint_cfg = session.config.lint
    lint_cfg = dataclasses.replace(
        lint_cfg,
        require_colon=require_colon or lint_cfg.require_colon,
        require_author=require_author or lint_cfg.require_author,
        uppercase_tag=uppercase_tag or lint_cfg.uppercase_tag,
    )

    provider = WorkingTreeProvider(session.root)
    snap = _snapshot(session, provider)
    result = run_lint(snap, FileScanner(provider, session.config.tags, session.registry), lint_cfg)

    if session.format == "json":
        print(json_report.render_lint(result))
    elif session.format == "sarif":
        print(sarif.render(sarif.lint_to_dict(result)))
    elif session.format == "markdown":
        _print_lines(markdown.format_lint(result))
    elif session.format == "github":
        _print_lines(github.format_lint(result))
    else:
        terminal.render_lint(result)

    if not result.passed:
        raise typer.Exit(code=1)


# ── brief ─────────────────────────────────────────────────────────────────────


@app.command()
def brief(
    since: Optional[str] = typer.Option(None, "--since", help="Base git ref for the trend line"),
    root: Path = ROOT_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    format: Optional[str] = FORMAT_OPTION,
    jobs: Optional[int] = JOBS_OPTION,
    strict: bool = STRICT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Summarise item counts by priority, with an optional trend."""
    from todox.items.brief import compute_brief
    from todox.items.differ import compute_diff
    from todox.output import json_report, terminal

    session = _open_session(
        root, config, format, jobs, strict, verbose, debug, formats=("text", "json")
    )
    base_provider = _base_provider(session, since) if since is not None else None
    snap = _snapshot(session)
    diff_result = None
    if base_provider is not None:
        diff_result = compute_diff(_snapshot(session, base_provider), snap)

    result = compute_brief(snap, diff_result)
    if session.format == "json":
        print(json_report.render_brief(result))
    else:
        terminal.render_brief(result)


# ── stats ─────────────────────────────────────────────────────────────────────


@app.command()
def stats(
    since: Optional[str] = typer.Option(None, "--since", help="Base git ref for the trend line"),
    root: Path = ROOT_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    format: Optional[str] = FORMAT_OPTION,
    jobs: Optional[int] = JOBS_OPTION,
    strict: bool = STRICT_OPTION,
    verbose: bool = VERBOSE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Break items down by tag, priority, author and file."""
    from todox.items.differ import compute_diff
    from todox.items.stats import compute_stats
    from todox.output import json_report, markdown, terminal

    session = _open_session(
        root, config, format, jobs, strict, verbose, debug, formats=("text", "json", "markdown")
    )
    base_provider = _base_provider(session, since) if since is not None else None
    snap = _snapshot(session)
    diff_result = None
    if base_provider is not None:
        diff_result = compute_diff(_snapshot(session, base_provider), snap)

    result = compute_stats(snap, diff_result)
    if session.format == "json":
        print(json_report.render_stats(result))
    elif session.format == "markdown":
        _print_lines(markdown.format_stats(result))
    else:
        terminal.render_stats(result)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    root: Path = ROOT_OPTION,
) -> None:
    """Generate a starter .todox.toml in the scan root."""
    from todox.config.defaults import DEFAULT_TOML
    from todox.config.loader import CONFIG_FILENAME

    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] not a directory: {escape(str(root))}")
        raise typer.Exit(code=2)
    config_path = root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"todox {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """todox — track tagged comments across git history and gate them in CI."""
