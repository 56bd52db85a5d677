"""
MIDI message framing inside an MTrk event stream.

An MTrk chunk is a bare sequence of {delta-time, message} pairs with no
delimiters, so the length of every message has to be derived from its
status byte (and, for SysEx and meta-events, from the bytes after it).

Message shapes:
    Channel message:  Sn d1 [d2]          (2 or 3 bytes, n = channel)
    System common:    F1 d1 / F2 d1 d2 / F3 d1 / F6
    Realtime:         F8-FE               (1 byte, may appear anywhere)
    SysEx:            F0 ... <status>     (ends at the first status byte)
    Meta-event:       FF type len data... (len read as one byte)

Running status:
    A channel message may omit its status byte when it equals the status
    of the previous message. The decoder writes the status byte back into
    every payload so consumers never see the compressed form.

Realtime interleaving:
    A realtime byte may appear between the data bytes of another message.
    It is spliced out as its own one-byte message and does not affect the
    enclosing message's framing or the running status.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from smfreader.errors import MissingStatusError, TruncatedInputError, UnknownStatusError
from smfreader.models.decoded_file import AnomalyKind

BytesLike = Union[bytes, bytearray, memoryview]

# Called as on_anomaly(kind, message, offset) for tolerated conditions
AnomalyCallback = Callable[[AnomalyKind, str, int], None]

SYSEX_START = 0xF0
SYSEX_END = 0xF7
META = 0xFF

# Lengths including the status byte
SYSTEM_MESSAGE_LENGTHS = {
    0xF1: 2,  # MTC Quarter Frame
    0xF2: 3,  # Song Position Pointer
    0xF3: 2,  # Song Select
    0xF6: 1,  # Tune Request
    0xF8: 1,  # Clock
    0xF9: 1,  # Tick
    0xFA: 1,  # Start
    0xFB: 1,  # Continue
    0xFC: 1,  # Stop
    0xFD: 1,  # Undefined realtime
    0xFE: 1,  # Active Sensing
}

CHANNEL_MESSAGE_LENGTHS = {
    0x80: 3,  # Note Off
    0x90: 3,  # Note On
    0xA0: 3,  # Polyphonic Aftertouch
    0xB0: 3,  # Control Change
    0xC0: 2,  # Program Change
    0xD0: 2,  # Channel Pressure
    0xE0: 3,  # Pitch Wheel
}


def is_status_byte(byte: int) -> bool:
    return bool(byte & 0x80)


def is_realtime_byte(byte: int) -> bool:
    return 0xF8 <= byte <= 0xFE


def expected_sysex_length(
    lookahead: BytesLike,
    offset: int = 0,
    on_anomaly: Optional[AnomalyCallback] = None,
) -> int:
    """
    Length of a SysEx message starting with 0xF0.

    Any status byte terminates the message and is counted as part of it.

    Args:
        lookahead: Bytes following the 0xF0 status byte
        offset: Absolute position of the 0xF0 byte (error context only)
        on_anomaly: Receives a warning if the terminator is not 0xF7

    Returns:
        Message length including 0xF0 and the terminator

    Raises:
        TruncatedInputError: If no terminator is found
    """
    for i, byte in enumerate(lookahead):
        if not is_status_byte(byte):
            continue

        if byte != SYSEX_END and on_anomaly is not None:
            on_anomaly(
                AnomalyKind.SYSEX_BAD_TERMINATOR,
                f"SysEx terminated by 0x{byte:02X} instead of 0xF7",
                offset + 1 + i,
            )

        # i data bytes + terminator + leading 0xF0
        return i + 2

    raise TruncatedInputError(
        "End of buffer in SysEx message",
        offset=offset + 1 + len(lookahead),
        expected="terminating status byte",
        found="end of buffer",
    )


def expected_message_length(
    status: int,
    lookahead: BytesLike,
    offset: int = 0,
    on_anomaly: Optional[AnomalyCallback] = None,
) -> int:
    """
    Total length of the message introduced by ``status``.

    Args:
        status: Status byte (high bit set)
        lookahead: Bytes following the status byte in the stream
        offset: Absolute position of the status byte (error context only)
        on_anomaly: Receives tolerated conditions (lone 0xF7, odd SysEx end)

    Returns:
        Message length in bytes, including the status byte

    Raises:
        TruncatedInputError: If lookahead is too short for the message
        UnknownStatusError: For undefined system status bytes (0xF4, 0xF5)
        ValueError: If ``status`` is not a status byte
    """
    if not is_status_byte(status):
        raise ValueError(f"Not a status byte: 0x{status:02X}")

    if status == META:
        # FF <type> <length> <data...>; length is taken as a single raw byte
        if len(lookahead) < 2:
            raise TruncatedInputError(
                "End of buffer in meta-event header",
                offset=offset,
                expected="type and length bytes",
                found=f"{len(lookahead)} byte(s)",
            )
        length = lookahead[1] + 3

    elif status == SYSEX_START:
        return expected_sysex_length(lookahead, offset, on_anomaly)

    elif status == SYSEX_END:
        if on_anomaly is not None:
            on_anomaly(
                AnomalyKind.LONE_EOX,
                "Status 0xF7 (End of SysEx) without matching 0xF0 (Start of SysEx)",
                offset,
            )
        return 1

    elif status & 0xF0 == 0xF0:
        if status not in SYSTEM_MESSAGE_LENGTHS:
            raise UnknownStatusError(
                "Unknown 0xFx-type status byte",
                offset=offset,
                expected="defined system status",
                found=f"0x{status:02X}",
            )
        length = SYSTEM_MESSAGE_LENGTHS[status]

    else:
        masked = status & 0xF0
        if masked not in CHANNEL_MESSAGE_LENGTHS:
            raise UnknownStatusError(
                "Unknown status byte",
                offset=offset,
                expected="channel status",
                found=f"0x{status:02X}",
            )
        length = CHANNEL_MESSAGE_LENGTHS[masked]

    if len(lookahead) < length - 1:
        raise TruncatedInputError(
            f"End of buffer in message with status 0x{status:02X}",
            offset=offset,
            expected=f"{length - 1} data byte(s)",
            found=f"{len(lookahead)} byte(s)",
        )

    return length


@dataclass
class ExtractedMessage:
    """
    One message taken off the event stream.

    Attributes:
        payload: Complete message bytes, status byte first
        consumed: Bytes consumed from the stream (spliced realtime bytes included)
        running_status: Running status to use for the next message
        realtime: Realtime messages spliced out of the payload, in stream order
    """

    payload: bytes
    consumed: int
    running_status: Optional[int]
    realtime: List[bytes] = field(default_factory=list)


def extract_message(
    data: BytesLike,
    previous_status: Optional[int],
    offset: int = 0,
    on_anomaly: Optional[AnomalyCallback] = None,
) -> ExtractedMessage:
    """
    Extract one message from the start of an event stream view.

    Args:
        data: Remaining event stream, starting right after the delta-time
        previous_status: Running status from the previous message (None at track start)
        offset: Absolute position of ``data[0]`` (error context only)
        on_anomaly: Receives tolerated conditions

    Returns:
        ExtractedMessage with payload, consumed byte count and new running status

    Raises:
        TruncatedInputError: If the message runs past the end of data
        MissingStatusError: If a data byte appears with no running status
        UnknownStatusError: For undefined status bytes
    """
    if not len(data):
        raise TruncatedInputError(
            "End of buffer before message",
            offset=offset,
            expected="status or data byte",
            found="end of buffer",
        )

    pos = 0
    if is_status_byte(data[0]):
        status = data[0]
        pos = 1
    elif previous_status is None:
        raise MissingStatusError(
            "Data byte without status byte and no running status",
            offset=offset,
            expected="status byte",
            found=f"0x{data[0]:02X}",
        )
    else:
        status = previous_status

    length = expected_message_length(status, data[pos:], offset, on_anomaly)

    payload = bytearray([status])
    realtime: List[bytes] = []

    # SysEx is framed by its first status byte and meta data is opaque
    splice = status not in (SYSEX_START, META)

    while len(payload) < length:
        if pos >= len(data):
            raise TruncatedInputError(
                f"End of buffer in message with status 0x{status:02X}",
                offset=offset + pos,
                expected=f"{length} byte message",
                found=f"{len(payload)} byte(s)",
            )

        byte = data[pos]
        pos += 1

        if splice and is_realtime_byte(byte):
            realtime.append(bytes([byte]))
            continue

        payload.append(byte)

    # Realtime messages never change the running status
    running_status = previous_status if is_realtime_byte(status) else status

    return ExtractedMessage(
        payload=bytes(payload),
        consumed=pos,
        running_status=running_status,
        realtime=realtime,
    )
