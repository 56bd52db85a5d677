"""
MThd header chunk parser.

MThd layout (14 bytes total):
    Offset  Size    Description
    0x00    4       Signature "MThd"
    0x04    4       Length, always 6
    0x08    2       Format (0, 1 or 2)
    0x0A    2       Number of tracks
    0x0C    2       Division

Division:
    Bit 15 clear: bits 0-14 are ticks per quarter note (PPQN)
    Bit 15 set:   high byte is -frames per second (two's complement),
                  low byte is ticks per frame (SMPTE timing)
"""

import struct
from typing import Tuple

from smfreader.errors import (
    BadFormatError,
    BadHeaderLengthError,
    BadSignatureError,
    BadTrackCountError,
    EndOfBufferError,
    TooShortError,
    UnsupportedFormatError,
    UnsupportedTimingError,
)
from smfreader.formats.smf.chunks import (
    CHUNK_HEADER_SIZE,
    MTHD,
    BytesLike,
    next_chunk,
    read_chunk_header,
)
from smfreader.models.header import SMFHeader

MTHD_LENGTH = 6
MIN_SIGNATURE_SIZE = 6
HEADER_CHUNK_SIZE = CHUNK_HEADER_SIZE + MTHD_LENGTH


def parse_header(buffer: BytesLike) -> Tuple[SMFHeader, int]:
    """
    Parse and validate the MThd chunk at the start of the buffer.

    Args:
        buffer: Complete file buffer

    Returns:
        Tuple of (header, offset of the first track chunk)

    Raises:
        TooShortError: Buffer cannot hold an MThd chunk
        BadSignatureError: Buffer does not start with "MThd"
        BadHeaderLengthError: MThd length is not 6
        BadFormatError: Format outside 0-2
        UnsupportedFormatError: Format 2
        BadTrackCountError: Zero tracks declared
        UnsupportedTimingError: SMPTE division or zero PPQN
    """
    if len(buffer) < MIN_SIGNATURE_SIZE:
        raise TooShortError(
            "File is too short, it cannot be a MIDI file",
            offset=0,
            expected=f"at least {HEADER_CHUNK_SIZE} bytes",
            found=f"{len(buffer)} byte(s)",
        )

    if bytes(buffer[:4]) != MTHD:
        raise BadSignatureError(
            "MThd signature not found, is that a MIDI file?",
            offset=0,
            expected=MTHD.decode("ascii"),
            found=bytes(buffer[:4]).decode("ascii", errors="replace"),
        )

    try:
        chunk = read_chunk_header(buffer, 0)
    except EndOfBufferError as exc:
        raise TooShortError(
            "File is too short to hold the MThd length field",
            offset=0,
            expected=f"at least {HEADER_CHUNK_SIZE} bytes",
            found=f"{len(buffer)} byte(s)",
        ) from exc

    if chunk.length != MTHD_LENGTH:
        raise BadHeaderLengthError(
            "Bad MThd chunk length",
            offset=4,
            expected=MTHD_LENGTH,
            found=chunk.length,
        )

    try:
        _, next_offset = next_chunk(buffer, 0)
    except EndOfBufferError as exc:
        raise TooShortError(
            "File is too short to hold the MThd body",
            offset=0,
            expected=f"at least {HEADER_CHUNK_SIZE} bytes",
            found=f"{len(buffer)} byte(s)",
        ) from exc

    format_, track_count, division = struct.unpack_from(">HHH", buffer, CHUNK_HEADER_SIZE)

    if format_ > 2:
        raise BadFormatError(
            "Bad MThd format field value",
            offset=0x08,
            expected="0-2",
            found=format_,
        )

    if format_ == 2:
        raise UnsupportedFormatError(
            "SMF file uses format #2, no support for that",
            offset=0x08,
            expected="0 or 1",
            found=format_,
        )

    if track_count == 0:
        raise BadTrackCountError(
            "Bad number of tracks",
            offset=0x0A,
            expected="greater than zero",
            found=track_count,
        )

    if division & 0x8000:
        (signed_high,) = struct.unpack_from(">b", buffer, 0x0C)
        frames_per_second = -signed_high
        resolution = buffer[0x0D]
        raise UnsupportedTimingError(
            "SMF file uses FPS timing instead of PPQN, no support for that",
            offset=0x0C,
            expected="PPQN division",
            found=f"{frames_per_second} FPS, {resolution} ticks per frame",
        )

    ppqn = division & 0x7FFF
    if ppqn == 0:
        raise UnsupportedTimingError(
            "SMF file declares zero ticks per quarter note",
            offset=0x0C,
            expected="PPQN greater than zero",
            found=ppqn,
        )

    header = SMFHeader(format=format_, track_count=track_count, ppqn=ppqn)
    return header, next_offset
