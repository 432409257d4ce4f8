"""Rich terminal reporter — colour, icons, status pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from convcheck.validator.message import commit_header
from convcheck.validator.models import CheckReport, ValidationResult


def _status_pill(passed: bool) -> Text:
    if passed:
        return Text(" ✓ PASS ", style="bold black on green")
    return Text(" ✗ FAIL ", style="bold white on red")


def _display_value(result: ValidationResult) -> str:
    # Commit messages can span many lines; the header identifies them
    header = commit_header(result.value)
    if header != result.value.strip():
        return header + " …"
    return result.value


def render(
    report: CheckReport,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not report.results:
        console.print("[dim]Nothing to check.[/dim]")
        if show_summary:
            _print_summary(console, report)
        return

    table = Table(show_lines=False, border_style="dim", title_style="bold")
    table.add_column("Status", justify="center", width=10)
    table.add_column("Convention", style="cyan")
    table.add_column("Value", style="magenta", overflow="fold")
    table.add_column("Reason")

    for result in report.results:
        table.add_row(
            _status_pill(result.passed),
            result.convention_id,
            Text(_display_value(result)),
            Text(result.message or ""),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, report)

    if report.passed:
        console.print("[bold green]✅ All conventions satisfied.[/bold green]")
    else:
        console.print(
            f"[bold red]❌ {len(report.failures)} value(s) break the conventions.[/bold red]"
        )


def _print_summary(console: Console, report: CheckReport) -> None:
    console.print(f"[dim]Checked:[/dim]  {report.total}")
    console.print(f"[dim]Failed:[/dim]   {len(report.failures)}")
    console.print(f"[dim]Skipped:[/dim]  {len(report.skipped)}")
