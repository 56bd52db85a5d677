"""
MIDI event data models.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from smfreader.errors import TruncatedInputError
from smfreader.utils.vlq import decode_vlq


class EventType(IntEnum):
    """Status bytes, with the channel nibble masked off for channel messages."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLY_PRESSURE = 0xA0
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_PRESSURE = 0xD0
    PITCH_BEND = 0xE0
    SYSEX = 0xF0
    MTC_QUARTER_FRAME = 0xF1
    SONG_POSITION = 0xF2
    SONG_SELECT = 0xF3
    TUNE_REQUEST = 0xF6
    END_OF_EXCLUSIVE = 0xF7
    CLOCK = 0xF8
    TICK = 0xF9
    START = 0xFA
    CONTINUE = 0xFB
    STOP = 0xFC
    ACTIVE_SENSING = 0xFE
    META = 0xFF


class MetaType(IntEnum):
    """Meta-event type bytes (the byte following 0xFF)."""

    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE_POINT = 0x07
    PROGRAM_NAME = 0x08
    DEVICE_NAME = 0x09
    CHANNEL_PREFIX = 0x20
    END_OF_TRACK = 0x2F
    SET_TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


# Meta types whose payload is a string
TEXT_META_TYPES = range(MetaType.TEXT, MetaType.DEVICE_NAME + 1)


@dataclass
class Event:
    """
    A single decoded event.

    The payload always starts with an explicit status byte, even when the
    file used running status for it.

    Attributes:
        time: Absolute time in ticks from the start of the track
        payload: Complete message bytes, status byte first
        delta_time: Ticks since the previous event in the same track
        number: 1-based position of the event within its track
    """

    time: int
    payload: bytes
    delta_time: int = 0
    number: int = 0

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    @property
    def status(self) -> int:
        return self.payload[0]

    @property
    def event_type(self) -> Optional[EventType]:
        """Message type, or None for undefined status bytes (0xF4, 0xF5, 0xFD)."""
        status = self.status if self.status >= 0xF0 else self.status & 0xF0
        try:
            return EventType(status)
        except ValueError:
            return None

    @property
    def channel(self) -> Optional[int]:
        """MIDI channel (0-15) for channel messages, None otherwise."""
        if self.status < 0xF0:
            return self.status & 0x0F
        return None

    @property
    def is_meta(self) -> bool:
        return self.status == EventType.META

    @property
    def is_sysex(self) -> bool:
        return self.status == EventType.SYSEX

    @property
    def is_realtime(self) -> bool:
        return 0xF8 <= self.status <= 0xFE

    @property
    def meta_type(self) -> Optional[int]:
        """Meta-event type byte, or None if this is not a meta-event."""
        if self.is_meta and len(self.payload) >= 2:
            return self.payload[1]
        return None

    @property
    def is_end_of_track(self) -> bool:
        return self.meta_type == MetaType.END_OF_TRACK

    @property
    def is_note_on(self) -> bool:
        """Check if this is a note-on event with velocity > 0."""
        return self.event_type == EventType.NOTE_ON and self.payload[2] > 0

    @property
    def is_note_off(self) -> bool:
        """Check if this is a note-off event (or note-on with velocity 0)."""
        return self.event_type == EventType.NOTE_OFF or (
            self.event_type == EventType.NOTE_ON and self.payload[2] == 0
        )

    @property
    def note(self) -> Optional[int]:
        """Note number for note events."""
        if self.event_type in (EventType.NOTE_ON, EventType.NOTE_OFF, EventType.POLY_PRESSURE):
            return self.payload[1]
        return None

    @property
    def velocity(self) -> Optional[int]:
        """Velocity for note events."""
        if self.event_type in (EventType.NOTE_ON, EventType.NOTE_OFF):
            return self.payload[2]
        return None

    @property
    def tempo(self) -> Optional[int]:
        """Microseconds per quarter note for Set Tempo meta-events."""
        if self.meta_type == MetaType.SET_TEMPO and len(self.payload) >= 6:
            return int.from_bytes(self.payload[3:6], "big")
        return None

    @property
    def text(self) -> Optional[str]:
        """
        String carried by a text-type meta-event (0x01-0x09).

        The length after the type byte is read as a VLQ. A declared length
        longer than the payload is clipped to what is there.

        Returns:
            Decoded string (latin-1) or None for other events
        """
        if self.meta_type not in TEXT_META_TYPES:
            return None

        try:
            length, length_size = decode_vlq(memoryview(self.payload)[2:])
        except TruncatedInputError:
            return None

        start = 2 + length_size
        return bytes(self.payload[start : start + length]).decode("latin-1")

    def __repr__(self) -> str:
        return f"Event(time={self.time}, payload={self.payload.hex(' ')})"
