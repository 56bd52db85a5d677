"""
smfreader - Standard MIDI File decoder.

This library decodes .mid files (formats 0 and 1, PPQN timing) into
tracks of time-stamped events:
- Chunk framing and MThd header validation
- Event stream decoding with running status and realtime interleaving
- Per-track error isolation: a broken track chunk is skipped, not fatal

Example usage:
    from smfreader import decode

    smf = decode("song.mid")
    for track in smf.tracks:
        print(track.number, track.name, track.event_count)

    for anomaly in smf.anomalies:
        print(anomaly.kind, anomaly.message)
"""

from loguru import logger

__version__ = "0.1.0"

from smfreader.errors import (
    SMFError,
    SMFReadError,
    HeaderError,
    TooShortError,
    BadSignatureError,
    BadHeaderLengthError,
    BadFormatError,
    UnsupportedFormatError,
    BadTrackCountError,
    UnsupportedTimingError,
    TrackError,
    EndOfBufferError,
    BadTrackSignatureError,
    TruncatedInputError,
    UnknownStatusError,
    MissingStatusError,
    DecoderInvariantError,
)
from smfreader.formats.smf.reader import SMFReader, decode, decode_bytes
from smfreader.models import (
    Anomaly,
    AnomalyKind,
    DecodedFile,
    Event,
    EventType,
    MetaType,
    SMFHeader,
    Track,
    TrackOutcome,
)

# Library code stays quiet unless the application enables it
logger.disable("smfreader")

__all__ = [
    "SMFReader",
    "decode",
    "decode_bytes",
    "DecodedFile",
    "SMFHeader",
    "Track",
    "Event",
    "EventType",
    "MetaType",
    "Anomaly",
    "AnomalyKind",
    "TrackOutcome",
    "SMFError",
    "SMFReadError",
    "HeaderError",
    "TooShortError",
    "BadSignatureError",
    "BadHeaderLengthError",
    "BadFormatError",
    "UnsupportedFormatError",
    "BadTrackCountError",
    "UnsupportedTimingError",
    "TrackError",
    "EndOfBufferError",
    "BadTrackSignatureError",
    "TruncatedInputError",
    "UnknownStatusError",
    "MissingStatusError",
    "DecoderInvariantError",
]
