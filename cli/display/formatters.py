"""
Display formatting utilities for CLI output.
"""

from typing import Iterable, Optional


def format_offset(offset: Optional[int]) -> str:
    """Format a file offset as hex, or a dash if unknown."""
    if offset is None:
        return "-"
    return f"0x{offset:04X}"


def format_channels(channels: Iterable[int]) -> str:
    """
    Format a set of 0-based MIDI channels as 1-based display numbers.

    Returns:
        String like "1, 2, 10", or "-" for no channels
    """
    numbers = sorted(ch + 1 for ch in channels)
    if not numbers:
        return "-"
    return ", ".join(str(n) for n in numbers)


def format_bytes(data: bytes, limit: int = 8) -> str:
    """
    Format bytes as spaced hex, truncated after ``limit`` bytes.

    Returns:
        String like "4D 54 68 64 ..."
    """
    text = " ".join(f"{b:02X}" for b in data[:limit])
    if len(data) > limit:
        text += " ..."
    return text


def severity_label(severity: str) -> str:
    """Rich markup label for a validation severity."""
    labels = {
        "error": "[red]ERROR[/red]",
        "warning": "[yellow]WARN[/yellow]",
        "info": "[blue]INFO[/blue]",
    }
    return labels.get(severity, severity.upper())
