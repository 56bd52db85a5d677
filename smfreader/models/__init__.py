"""Data models for decoded Standard MIDI Files."""

from smfreader.models.event import Event, EventType, MetaType
from smfreader.models.track import Track
from smfreader.models.header import SMFHeader
from smfreader.models.decoded_file import Anomaly, AnomalyKind, DecodedFile, TrackOutcome

__all__ = [
    "Event",
    "EventType",
    "MetaType",
    "Track",
    "SMFHeader",
    "Anomaly",
    "AnomalyKind",
    "DecodedFile",
    "TrackOutcome",
]
