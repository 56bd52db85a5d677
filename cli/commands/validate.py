"""
Validate command - check MIDI file structure and track integrity.
"""

from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_offset, severity_label
from smfreader.analysis.validator import SMFValidator, ValidationResult
from smfreader.errors import SMFReadError
from smfreader.formats.smf.reader import read_file

console = Console()


def display_validation(result: ValidationResult, verbose: bool = False) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    else:
        status = "[bold red]INVALID[/bold red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(result.filepath)}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    issues = result.errors + result.warnings
    if verbose:
        issues += result.info

    if not issues:
        return

    table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Severity", width=10)
    table.add_column("Area", style="cyan", width=12)
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Message", width=48)
    table.add_column("Expected / Actual", width=30)

    for issue in issues:
        detail = ""
        if issue.expected or issue.actual:
            detail = f"{issue.expected} / {issue.actual}"
        table.add_row(
            severity_label(issue.severity),
            issue.area,
            format_offset(issue.offset),
            escape(issue.message),
            escape(detail),
        )

    console.print(table)


def validate(
    file: Path = typer.Argument(..., help="MIDI file to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show all validation details"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate a Standard MIDI File.

    Checks for:

    - Valid MThd header (signature, length, format, track count, PPQN division)
    - Complete chunks, unknown chunk types and trailing bytes
    - Track chunks that fail to decode
    - Tolerated anomalies (odd SysEx terminators, missing End Of Track, ...)

    Examples:

        smfreader validate song.mid

        smfreader validate song.mid --strict
    """
    try:
        data = read_file(file)
    except SMFReadError as exc:
        console.print(f"[red]Error: {exc.message}[/red]")
        raise typer.Exit(1)

    result = SMFValidator(data, str(file)).validate()

    # In strict mode, treat warnings as errors
    if strict and result.warnings:
        result.valid = False

    display_validation(result, verbose=verbose)

    if not result.valid:
        raise typer.Exit(1)
