"""
CLI display modules.
"""

from cli.display.tables import (
    display_file_info,
    display_header_info,
    display_tracks_table,
    display_anomalies,
    display_chunk_map,
)
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_file_info",
    "display_header_info",
    "display_tracks_table",
    "display_anomalies",
    "display_chunk_map",
    "display_hex_dump",
]
