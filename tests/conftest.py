"""Test configuration and fixtures."""

import logging
import struct

import pytest

KICK_STEPS = [1, 0, 0, 0] * 4
SNARE_STEPS = [0, 0, 0, 0, 1, 0, 0, 0] * 2
HIHAT_STEPS = [0, 0, 1, 0] * 4


def _build_splice(
    version="0.808-alpha",
    tempo=120.0,
    tracks=(),
    declared_size=None,
    trailing=b"",
    raw_version=None,
    magic=b"SPLICE",
):
    """
    Assemble SPLICE file bytes.

    Args:
        version: Version text, NUL padded to 32 bytes
        tempo: Tempo stored as little-endian float32
        tracks: Iterable of (id, name, steps) where name is str or bytes
        declared_size: Override for the body size field
        trailing: Bytes appended after the body
        raw_version: Exact 32 byte version slot, bypassing ``version``
        magic: Header bytes

    Returns:
        Raw file contents
    """
    if raw_version is None:
        raw_version = version.encode("utf-8").ljust(32, b"\x00")

    body = raw_version + struct.pack("<f", tempo)
    for track_id, name, steps in tracks:
        if isinstance(name, str):
            name = name.encode("utf-8")
        body += struct.pack(">BI", track_id, len(name)) + name + bytes(steps)

    size = len(body) if declared_size is None else declared_size
    return magic + struct.pack(">Q", size) + body + trailing


@pytest.fixture
def build_splice():
    """Return the SPLICE byte builder."""
    return _build_splice


@pytest.fixture
def empty_pattern_data():
    """Pattern with a version and tempo but no tracks."""
    return _build_splice()


@pytest.fixture
def kick_pattern_data():
    """Pattern with a single kick track on every beat."""
    return _build_splice(tracks=[(1, "kick", KICK_STEPS)])


@pytest.fixture
def drum_pattern_data():
    """Pattern with three tracks and trailing padding after the body."""
    return _build_splice(
        version="0.909",
        tempo=98.4,
        tracks=[
            (0, "kick", KICK_STEPS),
            (1, "snare", SNARE_STEPS),
            (2, "hh-open", HIHAT_STEPS),
        ],
        trailing=b"\x00" * 8,
    )


@pytest.fixture
def splice_file(tmp_path, drum_pattern_data):
    """Write the drum pattern to disk and return its path."""
    path = tmp_path / "pattern_1.splice"
    path.write_bytes(drum_pattern_data)
    return path


@pytest.fixture
def broken_splice_file(tmp_path, build_splice):
    """A file whose last track has an invalid step byte."""
    path = tmp_path / "broken.splice"
    path.write_bytes(build_splice(tracks=[(5, "clap", [0] * 15 + [2])]))
    return path


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
