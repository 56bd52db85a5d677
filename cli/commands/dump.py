"""
Dump command - hex dump of a MIDI file or of one chunk.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from cli.display.hex_view import chunk_highlights, display_hex_dump
from smfreader.config import HEX_BYTES_PER_LINE, HEX_MAX_LINES
from smfreader.errors import EndOfBufferError, SMFReadError
from smfreader.formats.smf.chunks import ChunkHeader, iter_chunks
from smfreader.formats.smf.reader import read_file

console = Console()


def dump(
    file: Path = typer.Argument(..., help="MIDI file to dump"),
    chunk: Optional[int] = typer.Option(
        None, "--chunk", "-c", help="Dump only this chunk (index from the chunks command)"
    ),
    lines: int = typer.Option(HEX_MAX_LINES, "--lines", "-n", help="Maximum lines to show"),
    width: int = typer.Option(HEX_BYTES_PER_LINE, "--width", "-w", help="Bytes per line"),
) -> None:
    """
    Hex dump of a MIDI file.

    Chunk signatures are shown in green and chunk lengths in yellow.

    Examples:

        smfreader dump song.mid

        smfreader dump song.mid --chunk 1 --lines 64
    """
    try:
        data = read_file(file)
    except SMFReadError as exc:
        console.print(f"[red]Error: {exc.message}[/red]")
        raise typer.Exit(1)

    found: List[ChunkHeader] = []
    try:
        for header in iter_chunks(data):
            found.append(header)
    except EndOfBufferError as exc:
        console.print(f"[yellow]Warning: {exc}[/yellow]")

    highlight = chunk_highlights(found)

    if chunk is None:
        display_hex_dump(
            data,
            title=f"{file.name} ({len(data)} bytes)",
            bytes_per_line=width,
            max_lines=lines,
            highlight=highlight,
        )
        return

    if not 0 <= chunk < len(found):
        console.print(f"[red]Error: No chunk #{chunk} (file has {len(found)} complete chunks)[/red]")
        raise typer.Exit(1)

    selected = found[chunk]
    display_hex_dump(
        data[selected.offset : selected.end_offset],
        title=f"Chunk #{chunk} {selected.id} ({selected.length} bytes)",
        start_offset=selected.offset,
        bytes_per_line=width,
        max_lines=lines,
        highlight=highlight,
    )
