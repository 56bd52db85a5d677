"""Tests for MThd header parsing."""

import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from smfreader.errors import (
    BadFormatError,
    BadHeaderLengthError,
    BadSignatureError,
    BadTrackCountError,
    HeaderError,
    TooShortError,
    UnsupportedFormatError,
    UnsupportedTimingError,
)
from smfreader.formats.smf.header import parse_header

from conftest import make_header


class TestParseHeader:
    """Test cases for MThd validation."""

    def test_valid_header(self):
        """Test a format 1 header with PPQN division."""
        header, offset = parse_header(make_header(format_=1, track_count=3, division=480))

        assert header.format == 1
        assert header.track_count == 3
        assert header.ppqn == 480
        assert offset == 14

    def test_describe(self):
        """Test the one-line header summary."""
        header, _ = parse_header(make_header(format_=0, track_count=1, division=96))

        assert header.describe() == (
            "format: 0 (single track); number of tracks: 1; division: 96 PPQN."
        )

    def test_accepts_memoryview(self):
        """Test parsing from a memoryview."""
        header, _ = parse_header(memoryview(make_header(division=192)))

        assert header.ppqn == 192

    def test_too_short(self):
        """Test a buffer shorter than the signature check."""
        with pytest.raises(TooShortError):
            parse_header(b"MThd")

    def test_too_short_for_body(self):
        """Test a valid header cut before the division field."""
        with pytest.raises(TooShortError):
            parse_header(make_header()[:12])

    def test_bad_signature(self):
        """Test a buffer that does not start with MThd."""
        with pytest.raises(BadSignatureError) as exc_info:
            parse_header(b"RIFF" + bytes(10))

        assert exc_info.value.found == "RIFF"

    def test_bad_header_length(self):
        """Test a declared MThd length other than 6."""
        with pytest.raises(BadHeaderLengthError) as exc_info:
            parse_header(make_header(length=8) + bytes(2))

        assert exc_info.value.offset == 4
        assert exc_info.value.found == 8

    def test_bad_format(self):
        """Test a format value above 2."""
        with pytest.raises(BadFormatError):
            parse_header(make_header(format_=3))

    def test_format_2_unsupported(self):
        """Test format 2 is rejected as unsupported."""
        with pytest.raises(UnsupportedFormatError):
            parse_header(make_header(format_=2))

    def test_zero_tracks(self):
        """Test a header declaring no tracks."""
        with pytest.raises(BadTrackCountError):
            parse_header(make_header(track_count=0))

    def test_smpte_timing(self):
        """Test SMPTE division reports frames per second and resolution."""
        # -25 fps, 40 ticks per frame
        with pytest.raises(UnsupportedTimingError) as exc_info:
            parse_header(make_header(division=0xE728))

        assert "25 FPS" in exc_info.value.found
        assert "40 ticks per frame" in exc_info.value.found

    def test_zero_ppqn(self):
        """Test a PPQN division of zero."""
        with pytest.raises(UnsupportedTimingError):
            parse_header(make_header(division=0))

    def test_all_errors_are_header_errors(self):
        """Test every header failure shares the file-fatal base class."""
        for data in (b"", b"MThd", make_header(format_=2), make_header(division=0x8000 | 0x1E00)):
            with pytest.raises(HeaderError):
                parse_header(data)
