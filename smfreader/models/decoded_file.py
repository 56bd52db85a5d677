"""
Decoding result models: per-track outcomes, anomalies and the decoded file.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from smfreader.errors import SMFError
from smfreader.models.header import SMFHeader
from smfreader.models.track import Track


class AnomalyKind(Enum):
    """Conditions that are reported but do not fail decoding."""

    SYSEX_BAD_TERMINATOR = "sysex_bad_terminator"  # SysEx ended by a status other than 0xF7
    LONE_EOX = "lone_eox"  # 0xF7 without a matching 0xF0
    TRACK_COUNT_MISMATCH = "track_count_mismatch"
    FORMAT0_TRACK_COUNT = "format0_track_count"  # Format 0 declaring != 1 track
    SKIPPED_CHUNK = "skipped_chunk"  # Non-MTrk chunk where a track was expected
    MISSING_END_OF_TRACK = "missing_end_of_track"


@dataclass
class Anomaly:
    """
    An advisory condition found while decoding.

    Attributes:
        kind: Anomaly category
        message: Human readable description
        offset: Absolute byte offset in the file (if known)
        track_index: 0-based declared track slot (None for file-level anomalies)
    """

    kind: AnomalyKind
    message: str
    offset: Optional[int] = None
    track_index: Optional[int] = None


@dataclass
class TrackOutcome:
    """
    Result of decoding one declared track slot.

    Exactly one of ``track`` and ``error`` is set.

    Attributes:
        index: 0-based declared track slot
        offset: Offset of the chunk consumed for this slot
        track: Decoded track on success
        error: Track-fatal error on failure
    """

    index: int
    offset: int
    track: Optional[Track] = None
    error: Optional[SMFError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DecodedFile:
    """
    A decoded Standard MIDI File.

    Attributes:
        header: Parsed MThd contents
        outcomes: One outcome per declared track slot, in file order
        anomalies: Advisory conditions found while decoding
        path: Source file path (None when decoded from bytes)
    """

    header: SMFHeader
    outcomes: List[TrackOutcome] = field(default_factory=list)
    anomalies: List[Anomaly] = field(default_factory=list)
    path: Optional[Path] = None

    @property
    def format(self) -> int:
        return self.header.format

    @property
    def track_count(self) -> int:
        """Number of tracks declared by the header."""
        return self.header.track_count

    @property
    def ppqn(self) -> int:
        return self.header.ppqn

    @property
    def tracks(self) -> List[Track]:
        """Successfully decoded tracks."""
        return [o.track for o in self.outcomes if o.track is not None]

    @property
    def failed_tracks(self) -> List[TrackOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def is_complete(self) -> bool:
        """True if every declared track was decoded."""
        return len(self.tracks) == self.track_count

    def get_anomalies(self, kind: AnomalyKind) -> List[Anomaly]:
        return [a for a in self.anomalies if a.kind == kind]
