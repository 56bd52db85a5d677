"""
SMF chunk framing.

A Standard MIDI File is a flat sequence of chunks:

    Offset  Size    Description
    +0      4       Signature (ASCII, "MThd" or "MTrk")
    +4      4       Payload length (big-endian u32)
    +8      length  Payload

Chunks are walked strictly in order; the only way to find a chunk is to
add the previous chunk's length to its offset.
"""

import struct
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from smfreader.errors import EndOfBufferError

BytesLike = Union[bytes, bytearray, memoryview]

CHUNK_HEADER_SIZE = 8
MTHD = b"MThd"
MTRK = b"MTrk"


@dataclass(frozen=True)
class ChunkHeader:
    """
    Chunk header located in the file buffer.

    Attributes:
        signature: 4-byte chunk signature
        length: Declared payload length
        offset: Offset of the chunk header in the buffer
    """

    signature: bytes
    length: int
    offset: int

    @property
    def id(self) -> str:
        """Signature as printable text."""
        return self.signature.decode("ascii", errors="replace")

    @property
    def payload_offset(self) -> int:
        return self.offset + CHUNK_HEADER_SIZE

    @property
    def end_offset(self) -> int:
        """Offset of the byte after the payload (start of the next chunk)."""
        return self.payload_offset + self.length

    def matches(self, signature: bytes) -> bool:
        return self.signature == signature


def read_chunk_header(buffer: BytesLike, offset: int) -> ChunkHeader:
    """
    Read the chunk header at ``offset`` without checking the payload bounds.

    Args:
        buffer: Complete file buffer
        offset: Offset of the chunk header

    Returns:
        ChunkHeader

    Raises:
        EndOfBufferError: If fewer than 8 bytes remain at offset
    """
    available = len(buffer) - offset
    if offset < 0 or available < CHUNK_HEADER_SIZE:
        raise EndOfBufferError(
            "End of buffer in chunk header",
            offset=offset,
            expected=f"{CHUNK_HEADER_SIZE} bytes",
            found=f"{max(available, 0)} byte(s)",
        )

    signature = bytes(buffer[offset : offset + 4])
    (length,) = struct.unpack_from(">I", buffer, offset + 4)

    return ChunkHeader(signature=signature, length=length, offset=offset)


def next_chunk(buffer: BytesLike, offset: int) -> Tuple[ChunkHeader, int]:
    """
    Frame the chunk at ``offset``.

    Args:
        buffer: Complete file buffer
        offset: Offset of the chunk header

    Returns:
        Tuple of (chunk header, offset of the following chunk)

    Raises:
        EndOfBufferError: If the chunk extends past the end of the buffer
    """
    chunk = read_chunk_header(buffer, offset)

    if chunk.end_offset > len(buffer):
        raise EndOfBufferError(
            f"{chunk.id} chunk extends past end of buffer",
            offset=offset,
            expected=f"{chunk.length} payload bytes",
            found=f"{len(buffer) - chunk.payload_offset} byte(s)",
        )

    return chunk, chunk.end_offset


def iter_chunks(buffer: BytesLike, offset: int = 0) -> Iterator[ChunkHeader]:
    """
    Yield chunks from ``offset`` until the end of the buffer.

    Raises:
        EndOfBufferError: When a truncated chunk (or trailing bytes) is reached,
            after all complete chunks before it have been yielded
    """
    while offset < len(buffer):
        chunk, offset = next_chunk(buffer, offset)
        yield chunk


def chunk_payload(buffer: BytesLike, chunk: ChunkHeader) -> memoryview:
    """Zero-copy view of a chunk's payload."""
    return memoryview(buffer)[chunk.payload_offset : chunk.end_offset]
