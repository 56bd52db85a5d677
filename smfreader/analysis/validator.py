"""
Structural validation of Standard MIDI Files.

Unlike SMFReader, the validator never raises for malformed input: every
problem becomes an issue in the returned ValidationResult.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from smfreader.errors import EndOfBufferError, HeaderError
from smfreader.formats.smf.chunks import CHUNK_HEADER_SIZE, MTHD, MTRK, ChunkHeader, next_chunk
from smfreader.formats.smf.header import parse_header
from smfreader.formats.smf.reader import SMFReader
from smfreader.models.decoded_file import DecodedFile
from smfreader.models.header import SMFHeader


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    offset: int
    message: str
    expected: str = ""
    actual: str = ""


@dataclass
class ValidationResult:
    """Result of validating a Standard MIDI File."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)
    chunks: List[ChunkHeader] = field(default_factory=list)
    decoded: Optional[DecodedFile] = None

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class SMFValidator:
    """
    Validate SMF chunk structure, header fields and track contents.

    Example:
        result = SMFValidator(data, "song.mid").validate()
        if not result.valid:
            for issue in result.errors:
                print(issue.area, issue.message)
    """

    def __init__(self, data: bytes, filepath: str = ""):
        self.data = data
        self.filepath = filepath
        self.issues: List[ValidationIssue] = []
        self.header: Optional[SMFHeader] = None
        self.chunks: List[ChunkHeader] = []
        self.decoded: Optional[DecodedFile] = None

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []
        self.chunks = []
        self.decoded = None

        self._validate_header()
        self._validate_chunks()
        if self.header is not None:
            self._validate_tracks()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            info=info,
            chunks=list(self.chunks),
            decoded=self.decoded,
        )

    def _add_issue(
        self,
        severity: str,
        area: str,
        offset: Optional[int],
        message: str,
        expected: str = "",
        actual: str = "",
    ) -> None:
        """Add a validation issue."""
        self.issues.append(
            ValidationIssue(
                severity=severity,
                area=area,
                offset=offset or 0,
                message=message,
                expected=expected,
                actual=actual,
            )
        )

    def _validate_header(self) -> None:
        """Check the MThd chunk."""
        try:
            self.header, _ = parse_header(self.data)
        except HeaderError as exc:
            self._add_issue(
                "error",
                "Header",
                exc.offset,
                exc.message,
                "" if exc.expected is None else str(exc.expected),
                "" if exc.found is None else str(exc.found),
            )
            return

        self._add_issue("info", "Header", 0, self.header.describe())

    def _validate_chunks(self) -> None:
        """Walk the chunk list and check for unknown or truncated chunks."""
        offset = 0

        while offset < len(self.data):
            remaining = len(self.data) - offset
            if remaining < CHUNK_HEADER_SIZE:
                self._add_issue(
                    "warning",
                    "Chunks",
                    offset,
                    f"{remaining} trailing byte(s) after last chunk",
                    "end of file",
                    f"{remaining} byte(s)",
                )
                return

            try:
                chunk, offset = next_chunk(self.data, offset)
            except EndOfBufferError as exc:
                self._add_issue(
                    "error",
                    "Chunks",
                    exc.offset,
                    exc.message,
                    str(exc.expected),
                    str(exc.found),
                )
                return

            self.chunks.append(chunk)

            if not chunk.matches(MTHD) and not chunk.matches(MTRK):
                self._add_issue(
                    "warning",
                    "Chunks",
                    chunk.offset,
                    f"Unknown chunk type {chunk.id!r}",
                    "MThd or MTrk",
                    chunk.id,
                )

        track_chunks = sum(1 for c in self.chunks if c.matches(MTRK))
        self._add_issue("info", "Chunks", 0, f"{len(self.chunks)} chunks, {track_chunks} MTrk")

        if self.header is not None and track_chunks != self.header.track_count:
            self._add_issue(
                "warning",
                "Chunks",
                0,
                "MTrk chunk count differs from header",
                str(self.header.track_count),
                str(track_chunks),
            )

    def _validate_tracks(self) -> None:
        """Decode every track and report failures and anomalies."""
        self.decoded = SMFReader().parse_bytes(self.data)

        for outcome in self.decoded.failed_tracks:
            error = outcome.error
            self._add_issue(
                "error",
                f"Track {outcome.index + 1}",
                error.offset if error.offset is not None else outcome.offset,
                error.message,
                "" if error.expected is None else str(error.expected),
                "" if error.found is None else str(error.found),
            )

        for anomaly in self.decoded.anomalies:
            area = "File" if anomaly.track_index is None else f"Track {anomaly.track_index + 1}"
            self._add_issue("warning", area, anomaly.offset, anomaly.message)

        for track in self.decoded.tracks:
            self._add_issue(
                "info",
                f"Track {track.number}",
                track.chunk_offset,
                f"{track.event_count} events, ends at tick {track.end_time}",
            )
