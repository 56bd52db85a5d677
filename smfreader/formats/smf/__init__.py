"""Standard MIDI File format handlers."""

from smfreader.formats.smf.reader import SMFReader, decode, decode_bytes
from smfreader.formats.smf.track_parser import TrackParser
from smfreader.formats.smf.header import parse_header
from smfreader.formats.smf.chunks import ChunkHeader, iter_chunks, next_chunk

__all__ = [
    "SMFReader",
    "decode",
    "decode_bytes",
    "TrackParser",
    "parse_header",
    "ChunkHeader",
    "iter_chunks",
    "next_chunk",
]
