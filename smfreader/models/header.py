"""
MThd header data model.
"""

from dataclasses import dataclass

FORMAT_NAMES = {
    0: "single track",
    1: "several simultaneous tracks",
    2: "several independent tracks",
}


@dataclass
class SMFHeader:
    """
    Contents of the MThd chunk.

    Attributes:
        format: SMF format (0, 1 or 2)
        track_count: Number of MTrk chunks declared
        ppqn: Ticks per quarter note (0 when SMPTE timing is used)
        frames_per_second: SMPTE frames per second (0 for PPQN timing)
        resolution: SMPTE ticks per frame (0 for PPQN timing)
    """

    format: int
    track_count: int
    ppqn: int = 0
    frames_per_second: int = 0
    resolution: int = 0

    @property
    def format_name(self) -> str:
        return FORMAT_NAMES.get(self.format, "INVALID FORMAT")

    @property
    def is_single_track(self) -> bool:
        return self.format == 0

    def describe(self) -> str:
        """One-line summary of the header fields."""
        if self.ppqn:
            division = f"{self.ppqn} PPQN"
        else:
            division = f"{self.frames_per_second} FPS, {self.resolution} resolution"

        return (
            f"format: {self.format} ({self.format_name}); "
            f"number of tracks: {self.track_count}; division: {division}."
        )
