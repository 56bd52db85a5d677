"""
Track data model for decoded Standard MIDI Files.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from smfreader.models.event import Event, EventType, MetaType


@dataclass
class Track:
    """
    One decoded MTrk chunk.

    Events are kept in file order; their absolute times never decrease.

    Attributes:
        number: 1-based track number, counting successfully decoded tracks only
        events: Decoded events
        chunk_offset: Offset of the MTrk chunk header in the file
    """

    number: int = 1
    events: List[Event] = field(default_factory=list)
    chunk_offset: int = 0

    def add_event(self, time: int, payload: bytes) -> Event:
        """
        Create an event and append it to this track.

        Args:
            time: Absolute time in ticks
            payload: Complete message bytes

        Returns:
            The new Event
        """
        previous = self.events[-1].time if self.events else 0
        event = Event(
            time=time,
            payload=payload,
            delta_time=time - previous,
            number=len(self.events) + 1,
        )
        self.events.append(event)
        return event

    @property
    def event_count(self) -> int:
        return len(self.events)

    @property
    def end_time(self) -> int:
        """Absolute time of the last event."""
        if not self.events:
            return 0
        return self.events[-1].time

    @property
    def has_end_of_track(self) -> bool:
        return bool(self.events) and self.events[-1].is_end_of_track

    @property
    def name(self) -> Optional[str]:
        """Text of the first Sequence/Track Name meta-event, if any."""
        for event in self.events:
            if event.meta_type == MetaType.TRACK_NAME:
                return event.text
        return None

    @property
    def note_count(self) -> int:
        """Count note-on events with non-zero velocity."""
        return sum(1 for e in self.events if e.is_note_on)

    @property
    def channels(self) -> Set[int]:
        """Channels (0-15) used by channel messages in this track."""
        return {e.channel for e in self.events if e.channel is not None}

    def get_events(self, event_type: EventType) -> List[Event]:
        """Get all events of one type."""
        return [e for e in self.events if e.event_type == event_type]

    def get_meta_events(self, meta_type: MetaType) -> List[Event]:
        """Get all meta-events of one type."""
        return [e for e in self.events if e.meta_type == meta_type]
