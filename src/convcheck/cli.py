"""convcheck CLI — Typer application with check, branch, message, log, list, init, and hook commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from convcheck import __version__
from convcheck.config.loader import ConfigError
from convcheck.config.schema import OUTPUT_FORMATS, ConvCheckConfig
from convcheck.conventions.models import Convention
from convcheck.conventions.registry import ConventionRegistry
from convcheck.validator.models import CheckReport

app = typer.Typer(
    name="convcheck",
    help="Check branch names and commit messages against team conventions.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_CONFIG_OPT = typer.Option(None, "--config", "-c", help="Path to .convcheck.toml")
_FORMAT_OPT = typer.Option(None, "--format", "-f", help="Output format: terminal | text | json")
_VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Verbose output")


def _resolve_repo_root(required: bool = True) -> Path:
    """Find the git repo root. Exit 2 on failure unless *required* is False."""
    from convcheck.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        if not required:
            return Path.cwd()
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load(
    repo_root: Path,
    config: Optional[str],
    format: Optional[str],
    verbose: bool,
) -> Tuple[ConvCheckConfig, ConventionRegistry]:
    """Load config and conventions, applying CLI overrides. Exit 2 on config errors."""
    from convcheck.config.loader import load_config
    from convcheck.conventions.registry import build_registry

    try:
        cfg = load_config(repo_root, config)
        registry = build_registry(cfg, repo_root)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    if verbose:
        console.print(f"[dim]Repo root: {repo_root}[/dim]")
        console.print(f"[dim]Conventions loaded: {len(registry.enabled_conventions())}[/dim]")

    return cfg, registry


def _require_convention(
    registry: ConventionRegistry,
    convention_id: str,
    target: Optional[str] = None,
) -> Convention:
    convention = registry.get(convention_id)
    if convention is None:
        console.print(f"[bold red]Unknown convention:[/bold red] {convention_id}")
        raise typer.Exit(code=2)
    if not convention.enabled:
        console.print(f"[bold red]Convention is disabled:[/bold red] {convention_id}")
        raise typer.Exit(code=2)
    if target is not None and convention.target != target:
        console.print(
            f"[bold red]Convention {convention_id} checks {convention.target} values, "
            f"not {target}[/bold red]"
        )
        raise typer.Exit(code=2)
    return convention


def _emit(report: CheckReport, cfg: ConvCheckConfig) -> None:
    """Write *report* in the configured format."""
    from convcheck.output import json_report, terminal, text

    fmt = cfg.output.format
    if fmt == "terminal":
        terminal.render(report, show_summary=cfg.output.show_summary, console=console)
    elif fmt == "text":
        print(text.render(report, show_summary=cfg.output.show_summary))
    elif fmt == "json":
        print(json_report.render(report))


def _finish(report: CheckReport) -> None:
    raise typer.Exit(code=0 if report.passed else 1)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    value: str = typer.Argument(..., help="Branch name or commit message to check"),
    convention: str = typer.Option(..., "--convention", "-k", help="Convention id, e.g. branch or commit"),
    config: Optional[str] = _CONFIG_OPT,
    format: Optional[str] = _FORMAT_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Check a single value. Exits 0 on pass, 1 on fail (reason on stderr)."""
    from convcheck.validator.engine import ValidationFailure, ensure_valid

    repo_root = _resolve_repo_root(required=False)
    cfg, registry = _load(repo_root, config, format, verbose)
    conv = _require_convention(registry, convention)

    report = CheckReport()
    try:
        report.add(ensure_valid(value, conv))
    except ValidationFailure as exc:
        report.add(exc.result)

    if cfg.output.format == "terminal":
        result = report.results[0]
        if result.passed:
            console.print(f"[green]✓[/green] matches {conv.name}")
        else:
            console.print(f"[red]✗[/red] {escape(result.message or '')}")
    else:
        _emit(report, cfg)
        if not report.passed:
            console.print(f"[red]✗[/red] {escape(report.results[0].message or '')}")

    _finish(report)


# ── branch ────────────────────────────────────────────────────────────────────


@app.command()
def branch(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Branch name (default: current branch)"),
    config: Optional[str] = _CONFIG_OPT,
    format: Optional[str] = _FORMAT_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Check the current branch name against the branch convention."""
    from convcheck.git.adapter import GitError, get_current_branch
    from convcheck.validator.engine import validate

    repo_root = _resolve_repo_root(required=name is None)
    cfg, registry = _load(repo_root, config, format, verbose)
    conv = _require_convention(registry, cfg.branch.convention, "branch")

    if name is None:
        try:
            name = get_current_branch(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    report = CheckReport()
    if name in cfg.branch.exempt:
        report.skipped.append(name)
        if verbose:
            console.print(f"[dim]Branch {name} is exempt[/dim]")
    else:
        report.add(validate(name, conv))

    _emit(report, cfg)
    _finish(report)


# ── message ───────────────────────────────────────────────────────────────────


@app.command()
def message(
    file: Optional[Path] = typer.Argument(None, help="Commit message file (as passed to commit-msg hooks)"),
    config: Optional[str] = _CONFIG_OPT,
    format: Optional[str] = _FORMAT_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Check a commit message file, or the last commit's message."""
    from convcheck.git.adapter import GitError, get_last_commit_message
    from convcheck.validator.engine import validate
    from convcheck.validator.message import clean_commit_message, is_skipped

    repo_root = _resolve_repo_root(required=file is None)
    cfg, registry = _load(repo_root, config, format, verbose)
    conv = _require_convention(registry, cfg.commit.convention, "commit")

    if file is not None:
        try:
            raw = file.read_text(encoding="utf-8")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] cannot read {file}: {exc}")
            raise typer.Exit(code=2) from exc
    else:
        try:
            raw = get_last_commit_message(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    text = clean_commit_message(raw)

    report = CheckReport()
    if is_skipped(text, cfg.commit.skip_patterns):
        report.skipped.append(text)
        if verbose:
            console.print("[dim]Message matches a skip pattern[/dim]")
    else:
        report.add(validate(text, conv))

    _emit(report, cfg)
    _finish(report)


# ── log ───────────────────────────────────────────────────────────────────────


@app.command()
def log(
    from_ref: str = typer.Option(..., "--from", help="Base commit (exclusive)"),
    to_ref: str = typer.Option("HEAD", "--to", help="Head commit (inclusive)"),
    config: Optional[str] = _CONFIG_OPT,
    format: Optional[str] = _FORMAT_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Check every commit message in a range (CI mode)."""
    from convcheck.git.adapter import GitError, get_commit_messages
    from convcheck.validator.engine import validate
    from convcheck.validator.message import is_skipped

    repo_root = _resolve_repo_root()
    cfg, registry = _load(repo_root, config, format, verbose)
    conv = _require_convention(registry, cfg.commit.convention, "commit")

    try:
        commits = get_commit_messages(repo_root, from_ref, to_ref)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose:
        console.print(f"[dim]Commits in {from_ref}..{to_ref}: {len(commits)}[/dim]")

    report = CheckReport()
    for commit in commits:
        if is_skipped(commit.message, cfg.commit.skip_patterns):
            report.skipped.append(commit.sha)
            continue
        report.add(validate(commit.message, conv))

    _emit(report, cfg)
    _finish(report)


# ── list ──────────────────────────────────────────────────────────────────────


@app.command(name="list")
def list_conventions(
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Show every loaded convention."""
    repo_root = _resolve_repo_root(required=False)
    _, registry = _load(repo_root, config, None, verbose)

    table = Table(title="Conventions", title_style="bold", border_style="dim")
    table.add_column("Id", style="cyan")
    table.add_column("Target")
    table.add_column("Enabled", justify="center")
    table.add_column("Description", overflow="fold")

    for conv in registry.all_conventions:
        table.add_row(
            conv.id,
            conv.target,
            "[green]yes[/green]" if conv.enabled else "[dim]no[/dim]",
            conv.description,
        )

    Console().print(table)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing commit-msg hook"),
) -> None:
    """Install convcheck as a git commit-msg hook."""
    from convcheck.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the convcheck commit-msg hook."""
    from convcheck.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .convcheck.toml in the repo root."""
    from convcheck.config.defaults import DEFAULT_TOML
    from convcheck.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"convcheck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """convcheck — keep branch names and commit messages on convention."""
