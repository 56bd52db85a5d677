"""
Exception hierarchy for Standard MIDI File decoding.

Errors fall into two groups that decide how far a failure reaches:

- HeaderError / SMFReadError: fatal to the whole file. Decoding stops and
  no partial result is returned.
- TrackError: fatal to one track only. The offending track is skipped and
  decoding continues with the next declared track.

Every error carries the byte offset where it was detected and, where it
makes sense, the expected and found values.
"""

from typing import Any, Optional


class SMFError(Exception):
    """
    Base class for all decoding errors.

    Attributes:
        message: Human readable description
        offset: Absolute byte offset into the file buffer (if known)
        expected: What the decoder expected to find
        found: What the decoder actually found
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        expected: Any = None,
        found: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        parts = [self.message]
        if self.offset is not None:
            parts.append(f"at offset 0x{self.offset:X}")
        if self.expected is not None or self.found is not None:
            parts.append(f"(expected {self.expected}, found {self.found})")
        return " ".join(parts)


class SMFReadError(SMFError):
    """Raised when the file cannot be read from disk."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


# ---------------------------------------------------------------------------
# File-fatal header errors
# ---------------------------------------------------------------------------


class HeaderError(SMFError):
    """MThd chunk is missing or invalid."""


class TooShortError(HeaderError):
    """Buffer is too short to contain an MThd chunk."""


class BadSignatureError(HeaderError):
    """First chunk is not MThd."""


class BadHeaderLengthError(HeaderError):
    """MThd declared length is not 6."""


class BadFormatError(HeaderError):
    """MThd format field is outside 0-2."""


class UnsupportedFormatError(HeaderError):
    """Format 2 (independent tracks) is not supported."""


class BadTrackCountError(HeaderError):
    """MThd declares zero tracks."""


class UnsupportedTimingError(HeaderError):
    """Division is not a usable PPQN value (SMPTE timing or zero)."""


# ---------------------------------------------------------------------------
# Track-fatal errors
# ---------------------------------------------------------------------------


class TrackError(SMFError):
    """A track chunk could not be decoded; the track is skipped."""


class EndOfBufferError(TrackError):
    """Chunk header or payload extends past the end of the buffer."""


class BadTrackSignatureError(TrackError):
    """Expected an MTrk chunk, found something else."""


class TruncatedInputError(TrackError):
    """Read past the end of the available bytes."""


class UnknownStatusError(TrackError):
    """Status byte with no known message length."""


class MissingStatusError(TrackError):
    """Data byte found where a status byte is required and no running status is set."""


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------


class DecoderInvariantError(SMFError):
    """Decoded event failed its self-consistency check. Indicates a decoder bug."""
