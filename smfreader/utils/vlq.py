"""
MIDI variable-length quantity (VLQ) encoding/decoding.

Standard MIDI Files store delta-times (and several lengths) as "packed"
numbers: big-endian groups of 7 bits, one group per byte. Every byte except
the last has its high bit (bit 7) set as a continuation flag.

Example:
    Value:   0x2000 (8192)
    Groups:  0b1000000 0b0000000 (7 bits each, most significant first)
    Encoded: [0xC0, 0x00]

The format itself states no maximum width, so none is enforced here.
Practical values fit in 32 bits (at most 4 encoded bytes).
"""

from typing import Tuple, Union

from smfreader.errors import TruncatedInputError

BytesLike = Union[bytes, bytearray, memoryview]


def decode_vlq(data: BytesLike, offset: int = 0) -> Tuple[int, int]:
    """
    Decode a variable-length quantity from the start of a byte view.

    Never reads past the end of ``data``.

    Args:
        data: Bytes starting at the first VLQ byte
        offset: Absolute position of ``data[0]`` in the file (error context only)

    Returns:
        Tuple of (value, bytes consumed)

    Raises:
        TruncatedInputError: If the continuation chain runs past the end of data

    Example:
        >>> decode_vlq(bytes([0x81, 0x00, 0x55]))
        (128, 2)
    """
    value = 0

    for i, byte in enumerate(data):
        value = (value << 7) | (byte & 0x7F)

        # High bit clear terminates the quantity
        if not byte & 0x80:
            return value, i + 1

    raise TruncatedInputError(
        "End of buffer in variable-length quantity",
        offset=offset + len(data),
        expected="byte with high bit clear",
        found="end of buffer",
    )


def encode_vlq(value: int) -> bytes:
    """
    Encode a non-negative integer as a variable-length quantity.

    Args:
        value: Integer to encode

    Returns:
        Encoded bytes (at least one)

    Raises:
        ValueError: If value is negative

    Example:
        >>> encode_vlq(128)
        b'\\x81\\x00'
    """
    if value < 0:
        raise ValueError(f"VLQ value must be non-negative, got {value}")

    result = bytearray([value & 0x7F])
    value >>= 7

    while value:
        result.insert(0, (value & 0x7F) | 0x80)
        value >>= 7

    return bytes(result)
