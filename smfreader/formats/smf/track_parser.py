"""
MTrk chunk parser.

Decodes one track's event stream:

    MTrk <length> { <delta-time VLQ> <message> }* ... FF 2F 00

Delta-times are turned into absolute times by summing them. The running
status and the cumulative time exist only for the duration of one parse()
call, so tracks never share decoder state.
"""

from typing import List, Optional

from loguru import logger

from smfreader.errors import BadTrackSignatureError, DecoderInvariantError, TrackError
from smfreader.formats.smf.chunks import MTRK, BytesLike, ChunkHeader, chunk_payload
from smfreader.formats.smf.messages import expected_message_length, extract_message
from smfreader.models.decoded_file import Anomaly, AnomalyKind
from smfreader.models.event import Event
from smfreader.models.track import Track
from smfreader.utils.vlq import decode_vlq


class TrackParser:
    """
    Parser for MTrk chunks.

    Anomalies found during the last parse() call are kept in ``anomalies``,
    including those found before a track-fatal error.

    Example:
        parser = TrackParser()
        track = parser.parse(data, chunk, number=1)
        print(f"{track.event_count} events, ends at tick {track.end_time}")
    """

    def __init__(self):
        self.anomalies: List[Anomaly] = []
        self._index: Optional[int] = None

    def parse(
        self,
        buffer: BytesLike,
        chunk: ChunkHeader,
        number: int = 1,
        index: Optional[int] = None,
    ) -> Track:
        """
        Decode the events of one MTrk chunk.

        Args:
            buffer: Complete file buffer
            chunk: Framed chunk expected to be MTrk
            number: Track number to assign on success
            index: Declared track slot (recorded on anomalies)

        Returns:
            Decoded Track

        Raises:
            BadTrackSignatureError: Chunk is not MTrk
            TruncatedInputError: Event stream ends mid-event
            MissingStatusError: Running status used before any status byte
            UnknownStatusError: Undefined status byte
            DecoderInvariantError: Decoded event failed its consistency check
        """
        self.anomalies = []
        self._index = index

        if not chunk.matches(MTRK):
            raise BadTrackSignatureError(
                "Expected MTrk signature; ignoring this chunk",
                offset=chunk.offset,
                expected=MTRK.decode("ascii"),
                found=chunk.id,
            )

        track = Track(number=number, chunk_offset=chunk.offset)
        view = chunk_payload(buffer, chunk)
        base = chunk.payload_offset

        pos = 0
        time = 0
        status: Optional[int] = None

        while pos < len(view):
            delta, consumed = decode_vlq(view[pos:], offset=base + pos)
            pos += consumed
            time += delta

            message_offset = base + pos
            message = extract_message(view[pos:], status, message_offset, self._report)
            pos += message.consumed
            status = message.running_status

            # Realtime bytes were encountered before the enclosing message completed
            for realtime in message.realtime:
                self._check_event(track.add_event(time, realtime), message_offset)

            event = track.add_event(time, message.payload)
            self._check_event(event, message_offset)

            if event.is_end_of_track:
                break
        else:
            self._report(
                AnomalyKind.MISSING_END_OF_TRACK,
                f"Track {number} has no End Of Track event",
                chunk.end_offset,
            )

        logger.debug(
            "Track {} parsed: {} events, last at tick {}",
            track.number,
            track.event_count,
            track.end_time,
        )

        return track

    def _check_event(self, event: Event, offset: int) -> None:
        """Verify the payload length agrees with a fresh length computation."""
        if not event.payload:
            raise DecoderInvariantError("Decoded event has an empty payload", offset=offset)

        payload = memoryview(event.payload)
        try:
            expected = expected_message_length(payload[0], payload[1:], offset)
        except (TrackError, ValueError) as exc:
            raise DecoderInvariantError(
                f"Decoded event is not a complete message: {exc}", offset=offset
            ) from exc

        if expected != event.payload_length:
            raise DecoderInvariantError(
                "Decoded event length does not match its status byte",
                offset=offset,
                expected=expected,
                found=event.payload_length,
            )

    def _report(self, kind: AnomalyKind, message: str, offset: int) -> None:
        logger.warning("SMF warning: {} (offset 0x{:X})", message, offset)
        self.anomalies.append(
            Anomaly(kind=kind, message=message, offset=offset, track_index=self._index)
        )
