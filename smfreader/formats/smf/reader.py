"""
Standard MIDI File reader.

Reads .mid files and decodes them into a DecodedFile: the MThd header plus
one outcome per declared track. A track chunk that cannot be decoded is
skipped; the rest of the file is still decoded.
"""

from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from smfreader.errors import BadTrackSignatureError, EndOfBufferError, SMFReadError, TrackError
from smfreader.formats.smf.chunks import MTHD, BytesLike, ChunkHeader, next_chunk
from smfreader.formats.smf.header import parse_header
from smfreader.formats.smf.track_parser import TrackParser
from smfreader.models.decoded_file import Anomaly, AnomalyKind, DecodedFile, TrackOutcome


def read_file(filepath: Union[str, Path]) -> bytes:
    """
    Read a whole file into memory.

    Raises:
        SMFReadError: If the file cannot be opened or read
    """
    filepath = Path(filepath)

    try:
        return filepath.read_bytes()
    except OSError as exc:
        raise SMFReadError(f"Cannot read input file: {exc.strerror or exc}", str(filepath)) from exc


class SMFReader:
    """
    Reader for Standard MIDI Files (formats 0 and 1, PPQN timing).

    Example:
        smf = SMFReader.read("song.mid")
        print(f"Format {smf.format}, {len(smf.tracks)} tracks, {smf.ppqn} PPQN")
    """

    def __init__(self):
        self.track_parser = TrackParser()
        self.anomalies: List[Anomaly] = []

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> DecodedFile:
        """
        Read a Standard MIDI File and decode it.

        Args:
            filepath: Path to .mid file

        Returns:
            Decoded file
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> DecodedFile:
        """
        Decode a file from disk.

        Args:
            filepath: Path to .mid file

        Returns:
            Decoded file

        Raises:
            SMFReadError: File cannot be read
            HeaderError: MThd chunk missing or unsupported
        """
        filepath = Path(filepath)
        data = read_file(filepath)
        return self.parse_bytes(data, path=filepath)

    def parse_bytes(self, data: BytesLike, path: Optional[Path] = None) -> DecodedFile:
        """
        Decode SMF data from bytes.

        Args:
            data: Raw file contents
            path: Source path to record on the result

        Returns:
            Decoded file

        Raises:
            HeaderError: MThd chunk missing or unsupported
        """
        self.anomalies = []

        header, offset = parse_header(data)
        logger.debug("SMF header contents: {}", header.describe())

        if header.is_single_track and header.track_count != 1:
            self._report(
                AnomalyKind.FORMAT0_TRACK_COUNT,
                f"Number of tracks is {header.track_count}, but this is a single track file",
                offset=0x0A,
            )

        result = DecodedFile(header=header, path=path)

        for index in range(header.track_count):
            try:
                chunk, next_offset = next_chunk(data, offset)
            except EndOfBufferError as exc:
                logger.error("SMF error: file is truncated: {}", exc)
                result.outcomes.append(TrackOutcome(index=index, offset=offset, error=exc))
                continue

            # Each declared track consumes one chunk, whatever its signature
            offset = next_offset
            result.outcomes.append(self._parse_track(data, chunk, index, len(result.tracks) + 1))

        decoded = len(result.tracks)
        if decoded != header.track_count:
            self._report(
                AnomalyKind.TRACK_COUNT_MISMATCH,
                f"MThd header declared {header.track_count} tracks, "
                f"but only {decoded} found; continuing anyway",
            )

        result.anomalies = self.anomalies
        return result

    def _parse_track(
        self, data: BytesLike, chunk: ChunkHeader, index: int, number: int
    ) -> TrackOutcome:
        """
        Decode the chunk for one declared track slot.

        Track-fatal errors are captured in the outcome instead of raised.
        """
        offset = chunk.offset

        try:
            track = self.track_parser.parse(data, chunk, number=number, index=index)
        except TrackError as exc:
            if isinstance(exc, BadTrackSignatureError):
                self._report(
                    AnomalyKind.SKIPPED_CHUNK,
                    f"Expected MTrk signature, got {chunk.id!r} instead; ignoring this chunk",
                    offset=chunk.offset,
                    track_index=index,
                )
            else:
                logger.error("SMF error: track {} skipped: {}", index + 1, exc)
            return TrackOutcome(index=index, offset=offset, error=exc)
        finally:
            self.anomalies.extend(self.track_parser.anomalies)
            self.track_parser.anomalies = []

        return TrackOutcome(index=index, offset=offset, track=track)

    def _report(
        self,
        kind: AnomalyKind,
        message: str,
        offset: Optional[int] = None,
        track_index: Optional[int] = None,
    ) -> None:
        logger.warning("SMF warning: {}", message)
        self.anomalies.append(
            Anomaly(kind=kind, message=message, offset=offset, track_index=track_index)
        )

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like a Standard MIDI File.

        Args:
            filepath: Path to check

        Returns:
            True if the file starts with the MThd signature
        """
        filepath = Path(filepath)

        try:
            with open(filepath, "rb") as f:
                return f.read(4) == MTHD
        except OSError:
            return False


def decode(filepath: Union[str, Path]) -> DecodedFile:
    """
    Convenience function to decode a Standard MIDI File.

    Args:
        filepath: Path to .mid file

    Returns:
        Decoded file
    """
    return SMFReader.read(filepath)


def decode_bytes(data: BytesLike) -> DecodedFile:
    """
    Convenience function to decode SMF data held in memory.

    Args:
        data: Raw file contents

    Returns:
        Decoded file
    """
    return SMFReader().parse_bytes(data)
