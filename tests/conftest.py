"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfreader.utils.vlq import encode_vlq

END_OF_TRACK = bytes([0x00, 0xFF, 0x2F, 0x00])

# Note On / Note Off / End Of Track at PPQN 96
SCENARIO_A_EVENTS = bytes(
    [0x00, 0x90, 0x3C, 0x40]
    + [0x60, 0x80, 0x3C, 0x40]
    + [0x00, 0xFF, 0x2F, 0x00]
)


def make_chunk(signature: bytes, payload: bytes) -> bytes:
    """Build a chunk: 4-byte signature, big-endian length, payload."""
    return signature + struct.pack(">I", len(payload)) + payload


def make_header(format_: int = 1, track_count: int = 1, division: int = 96, length: int = 6) -> bytes:
    """Build an MThd chunk. ``length`` overrides the declared length only."""
    body = struct.pack(">HHH", format_, track_count, division)
    return b"MThd" + struct.pack(">I", length) + body


def make_track(events: bytes) -> bytes:
    """Build an MTrk chunk around raw event bytes."""
    return make_chunk(b"MTrk", events)


def make_events(*pairs) -> bytes:
    """Build an event stream from (delta, message bytes) pairs."""
    data = bytearray()
    for delta, message in pairs:
        data.extend(encode_vlq(delta))
        data.extend(message)
    return bytes(data)


def make_smf(tracks: List[bytes], format_: int = 1, division: int = 96) -> bytes:
    """Build a complete file from raw event streams, one per track."""
    data = make_header(format_, len(tracks), division)
    for events in tracks:
        data += make_track(events)
    return data


@pytest.fixture
def scenario_a_data():
    """Minimal format 0 file: one note and End Of Track."""
    return make_header(format_=0, track_count=1, division=96) + make_track(SCENARIO_A_EVENTS)


@pytest.fixture
def three_track_data():
    """Format 1 file with a conductor track and two note tracks."""
    conductor = make_events(
        (0, bytes([0xFF, 0x03, 0x05]) + b"Tempo"),
        (0, bytes([0xFF, 0x51, 0x03, 0x07, 0xA1, 0x20])),
        (0, bytes([0xFF, 0x2F, 0x00])),
    )
    piano = make_events(
        (0, bytes([0xFF, 0x03, 0x05]) + b"Piano"),
        (0, bytes([0x90, 0x3C, 0x64])),
        (48, bytes([0x3E, 0x64])),  # running status
        (48, bytes([0x3C, 0x00])),
        (0, bytes([0x3E, 0x00])),
        (0, bytes([0xFF, 0x2F, 0x00])),
    )
    bass = make_events(
        (0, bytes([0xC1, 0x21])),
        (0, bytes([0x91, 0x24, 0x50])),
        (192, bytes([0x81, 0x24, 0x40])),
        (0, bytes([0xFF, 0x2F, 0x00])),
    )
    return make_smf([conductor, piano, bass])


@pytest.fixture
def scenario_a_file(tmp_path, scenario_a_data):
    """Scenario A written to disk."""
    path = tmp_path / "scenario_a.mid"
    path.write_bytes(scenario_a_data)
    return path


@pytest.fixture
def three_track_file(tmp_path, three_track_data):
    """Three-track file written to disk."""
    path = tmp_path / "three_tracks.mid"
    path.write_bytes(three_track_data)
    return path


@pytest.fixture
def mido_file(tmp_path):
    """Format 1 file written by mido (uses running status)."""
    mido = pytest.importorskip("mido")

    mid = mido.MidiFile(type=1, ticks_per_beat=480)

    conductor = mido.MidiTrack()
    conductor.append(mido.MetaMessage("track_name", name="Conductor", time=0))
    conductor.append(mido.MetaMessage("set_tempo", tempo=500000, time=0))
    conductor.append(mido.MetaMessage("time_signature", numerator=3, denominator=4, time=0))
    conductor.append(mido.MetaMessage("end_of_track", time=1920))
    mid.tracks.append(conductor)

    melody = mido.MidiTrack()
    melody.append(mido.MetaMessage("track_name", name="Melody", time=0))
    melody.append(mido.Message("program_change", channel=2, program=40, time=0))
    melody.append(mido.Message("control_change", channel=2, control=7, value=100, time=0))
    for i, note in enumerate([60, 62, 64, 65, 67]):
        melody.append(mido.Message("note_on", channel=2, note=note, velocity=90, time=0 if i == 0 else 10))
        melody.append(mido.Message("note_on", channel=2, note=note, velocity=0, time=230))
    melody.append(mido.Message("pitchwheel", channel=2, pitch=1024, time=5))
    melody.append(mido.Message("aftertouch", channel=2, value=33, time=5))
    melody.append(mido.MetaMessage("end_of_track", time=0))
    mid.tracks.append(melody)

    path = tmp_path / "mido.mid"
    mid.save(str(path))
    return path
