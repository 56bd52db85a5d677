"""
Rich table displays for decoded MIDI file information.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_bytes, format_channels, format_offset
from smfreader.formats.smf.chunks import MTHD, MTRK, ChunkHeader
from smfreader.models.decoded_file import DecodedFile

console = Console()


def display_header_info(smf: DecodedFile) -> None:
    """Display the MThd header panel."""
    header = smf.header
    status = "[green]Complete[/green]" if smf.is_complete else "[yellow]Partial[/yellow]"

    content = f"""[bold]File:[/bold] {escape(str(smf.path or "-"))}
[bold]Format:[/bold] {header.format} ({header.format_name})
[bold]Tracks:[/bold] {len(smf.tracks)} decoded of {header.track_count} declared
[bold]Division:[/bold] {header.ppqn} PPQN
[bold]Status:[/bold] {status}"""

    console.print(
        Panel(
            content,
            title="[bold blue]MIDI File Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )


def display_tracks_table(smf: DecodedFile) -> None:
    """Display one row per declared track slot."""
    table = Table(title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold green")
    table.add_column("#", style="dim", width=4)
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Name", style="cyan", width=24)
    table.add_column("Events", justify="right", width=7)
    table.add_column("Notes", justify="right", width=7)
    table.add_column("Channels", width=14)
    table.add_column("End Tick", justify="right", width=9)
    table.add_column("Status", width=20)

    for outcome in smf.outcomes:
        track = outcome.track
        if track is None:
            table.add_row(
                str(outcome.index + 1),
                format_offset(outcome.offset),
                "[dim]-[/dim]",
                "-",
                "-",
                "-",
                "-",
                f"[red]{escape(type(outcome.error).__name__)}[/red]",
            )
            continue

        table.add_row(
            str(outcome.index + 1),
            format_offset(outcome.offset),
            escape(track.name or ""),
            str(track.event_count),
            str(track.note_count),
            format_channels(track.channels),
            str(track.end_time),
            "[green]OK[/green]",
        )

    console.print(table)


def display_anomalies(smf: DecodedFile) -> None:
    """Display anomalies and failed tracks, if any."""
    if not smf.anomalies and not smf.failed_tracks:
        return

    table = Table(title="Anomalies", box=box.SIMPLE, show_header=True, header_style="bold yellow")
    table.add_column("Kind", style="yellow", width=22)
    table.add_column("Track", width=6)
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Message", width=60)

    for outcome in smf.failed_tracks:
        table.add_row(
            "[red]track_error[/red]",
            str(outcome.index + 1),
            format_offset(outcome.error.offset),
            escape(str(outcome.error)),
        )

    for anomaly in smf.anomalies:
        track = "-" if anomaly.track_index is None else str(anomaly.track_index + 1)
        table.add_row(anomaly.kind.value, track, format_offset(anomaly.offset), escape(anomaly.message))

    console.print(table)


def display_file_info(smf: DecodedFile) -> None:
    """Display complete decoded file information."""
    display_header_info(smf)
    display_tracks_table(smf)
    display_anomalies(smf)


def display_chunk_map(chunks: List[ChunkHeader], data: bytes) -> None:
    """Display the chunk list with offsets and sizes."""
    table = Table(title="Chunk Map", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", width=6)
    table.add_column("Offset", width=8)
    table.add_column("Length", justify="right", width=8)
    table.add_column("Next", width=8)
    table.add_column("Payload Preview", width=28)

    for i, chunk in enumerate(chunks):
        if chunk.matches(MTHD):
            chunk_id = f"[bright_blue]{escape(chunk.id)}[/bright_blue]"
        elif chunk.matches(MTRK):
            chunk_id = f"[green]{escape(chunk.id)}[/green]"
        else:
            chunk_id = f"[red]{escape(chunk.id)}[/red]"

        preview = data[chunk.payload_offset : min(chunk.end_offset, chunk.payload_offset + 8)]
        table.add_row(
            str(i),
            chunk_id,
            format_offset(chunk.offset),
            str(chunk.length),
            format_offset(chunk.end_offset),
            format_bytes(preview, limit=8) + (" ..." if chunk.length > 8 else ""),
        )

    console.print(table)
