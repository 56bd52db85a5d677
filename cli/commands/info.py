"""
Info command - display header, track summary and anomalies.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_file_info
from smfreader.errors import SMFError
from smfreader.formats.smf.reader import SMFReader

console = Console()


def info(
    file: Path = typer.Argument(..., help="MIDI file to inspect"),
) -> None:
    """
    Show decoded MIDI file information.

    Displays the MThd header, one row per declared track (name, event and
    note counts, channels, last tick) and any anomalies found while decoding.

    Examples:

        smfreader info song.mid
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        smf = SMFReader.read(file)
    except SMFError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    display_file_info(smf)
