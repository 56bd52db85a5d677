"""
Hex dump display utilities.
"""

from typing import Dict, Iterable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from smfreader.config import HEX_BYTES_PER_LINE, HEX_MAX_LINES
from smfreader.formats.smf.chunks import CHUNK_HEADER_SIZE, ChunkHeader

console = Console()

SIGNATURE_STYLE = "bold green"
LENGTH_STYLE = "yellow"


def chunk_highlights(chunks: Iterable[ChunkHeader]) -> Dict[int, str]:
    """
    Map file offsets of chunk header bytes to display styles.

    Signature bytes and length bytes get different styles so chunk
    boundaries stand out in the dump.
    """
    styles = {}
    for chunk in chunks:
        for i in range(CHUNK_HEADER_SIZE):
            styles[chunk.offset + i] = SIGNATURE_STYLE if i < 4 else LENGTH_STYLE
    return styles


def format_hex_lines(
    data: bytes,
    start_offset: int = 0,
    bytes_per_line: int = HEX_BYTES_PER_LINE,
    max_lines: int = HEX_MAX_LINES,
    highlight: Optional[Dict[int, str]] = None,
) -> List[str]:
    """
    Build hex dump lines (Rich markup) for a block of data.

    Args:
        data: Bytes to dump
        start_offset: File offset of data[0], used for the address column
        bytes_per_line: Bytes shown on each line
        max_lines: Maximum lines before the rest is summarised
        highlight: Optional style per absolute file offset

    Returns:
        List of markup strings
    """
    highlight = highlight or {}
    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for row in range(0, end, bytes_per_line):
        addr = start_offset + row
        row_bytes = data[row : row + bytes_per_line]

        cells = []
        for i, value in enumerate(row_bytes):
            if i and i % 8 == 0:
                cells.append("")
            style = highlight.get(addr + i)
            cells.append(f"[{style}]{value:02X}[/{style}]" if style else f"{value:02X}")

        # Pad short rows so the ascii column lines up
        missing = bytes_per_line - len(row_bytes)
        padding = " " * (missing * 3 + (1 if len(row_bytes) <= 8 < bytes_per_line else 0))

        text = "".join(chr(b) if 32 <= b < 127 else "." for b in row_bytes)

        lines.append(f"[dim]{addr:08X}[/dim]  {' '.join(cells)}{padding}  [cyan]{escape(text)}[/cyan]")

    if len(data) > end:
        lines.append(f"[dim]... {len(data) - end} more bytes ...[/dim]")

    return lines


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = HEX_BYTES_PER_LINE,
    max_lines: int = HEX_MAX_LINES,
    highlight: Optional[Dict[int, str]] = None,
) -> None:
    """Display formatted hex dump with Rich."""
    lines = format_hex_lines(data, start_offset, bytes_per_line, max_lines, highlight)
    content = "\n".join(lines) if lines else "[dim](empty)[/dim]"
    console.print(Panel(content, title=escape(title), border_style="blue", expand=False))
