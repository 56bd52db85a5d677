"""
Chunks command - show the file's chunk structure.
"""

from pathlib import Path
from typing import List

import typer
from rich.console import Console

from cli.display.tables import display_chunk_map
from smfreader.errors import EndOfBufferError, SMFReadError
from smfreader.formats.smf.chunks import ChunkHeader, iter_chunks
from smfreader.formats.smf.reader import read_file

console = Console()


def chunks(
    file: Path = typer.Argument(..., help="MIDI file to map"),
) -> None:
    """
    List every chunk with its offset, length and next-chunk offset.

    Works on damaged files too: the list stops at the first chunk that
    runs past the end of the file.

    Examples:

        smfreader chunks song.mid
    """
    try:
        data = read_file(file)
    except SMFReadError as exc:
        console.print(f"[red]Error: {exc.message}[/red]")
        raise typer.Exit(1)

    found: List[ChunkHeader] = []
    problem = None

    try:
        for chunk in iter_chunks(data):
            found.append(chunk)
    except EndOfBufferError as exc:
        problem = exc

    display_chunk_map(found, data)

    if problem is not None:
        console.print(f"[yellow]Stopped: {problem}[/yellow]")
