"""Tests for the SPLICE file reader."""

import io
import logging
import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import splicedrum
from splicedrum import (
    DecodeResult,
    HeaderMismatch,
    MalformedField,
    SpliceReader,
    TruncatedInput,
    UnderlyingIOFailure,
    decode_file,
    try_decode,
)


class TestSpliceReader:
    """Test cases for the file level reader."""

    def test_read_file(self, splice_file):
        """Test reading a .splice file into a Pattern."""
        pattern = SpliceReader.read(splice_file)

        assert pattern.version == "0.909"
        assert pattern.track_count == 3

    def test_decode_file_accepts_str(self, splice_file):
        pattern = decode_file(str(splice_file))

        assert pattern.tracks[1].name == "snare"

    def test_render_from_file(self, tmp_path, kick_pattern_data):
        path = tmp_path / "kick.splice"
        path.write_bytes(kick_pattern_data)

        assert str(decode_file(path)) == (
            "Saved with HW Version: 0.808-alpha\n"
            "Tempo: 120\n"
            "(1) kick\t|x---|x---|x---|x---|\n"
        )

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="File not found"):
            SpliceReader.read(tmp_path / "nope.splice")

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"hello world, this is not a pattern")

        with pytest.raises(HeaderMismatch):
            decode_file(path)

    def test_directory_is_io_failure(self, tmp_path):
        """Test that an OS error while opening is wrapped and chained."""
        with pytest.raises(UnderlyingIOFailure) as excinfo:
            decode_file(tmp_path)

        assert isinstance(excinfo.value.__cause__, OSError)

    def test_huge_name_length_in_short_file(self, tmp_path):
        """Test that bogus lengths fail as truncation without a giant read."""
        data = (
            b"SPLICE"
            + struct.pack(">Q", 2 ** 62)
            + b"0.808-alpha".ljust(32, b"\x00")
            + struct.pack("<f", 120.0)
            + struct.pack(">BI", 1, 0xFFFFFFF0)
            + b"kick"
        )
        path = tmp_path / "bogus.splice"
        path.write_bytes(data)

        with pytest.raises(TruncatedInput) as excinfo:
            decode_file(path)

        assert excinfo.value.field == "track[0].name"
        assert excinfo.value.actual == "4 bytes"

    def test_parse_stream(self, drum_pattern_data):
        reader = SpliceReader()

        pattern = reader.parse_stream(io.BytesIO(drum_pattern_data))

        assert pattern == reader.parse_bytes(drum_pattern_data)
        assert reader.parser.declared_size == len(drum_pattern_data) - 14 - 8

    def test_logs_decoded_file(self, splice_file, caplog):
        with caplog.at_level(logging.INFO, logger="splicedrum"):
            SpliceReader.read(splice_file)

        assert "Decoded" in caplog.text
        assert "tracks=3" in caplog.text

    def test_can_read_check(self, splice_file, tmp_path):
        """Test file format detection."""
        assert SpliceReader.can_read(splice_file) is True

        other = tmp_path / "other.bin"
        other.write_bytes(b"YQ7PAT     V1.00")
        assert SpliceReader.can_read(other) is False
        assert SpliceReader.can_read(tmp_path / "missing.splice") is False
        assert SpliceReader.can_read(tmp_path) is False

    def test_get_file_info(self, splice_file, drum_pattern_data):
        """Test getting file info without full decoding."""
        info = SpliceReader.get_file_info(splice_file)

        assert info["valid"] is True
        assert info["header"] == "SPLICE"
        assert info["size"] == len(drum_pattern_data)
        assert info["declared_size"] == len(drum_pattern_data) - 14 - 8
        assert info["trailing_bytes"] == 8

    def test_get_file_info_short_file(self, tmp_path):
        path = tmp_path / "short.splice"
        path.write_bytes(b"SPL")

        info = SpliceReader.get_file_info(path)

        assert info["valid"] is False
        assert info["declared_size"] is None


class TestTryDecode:
    """Test cases for the non raising decode."""

    def test_success(self, kick_pattern_data):
        result = try_decode(kick_pattern_data)

        assert isinstance(result, DecodeResult)
        assert result.ok
        assert result.error is None
        assert result.pattern.tracks[0].name == "kick"

    def test_stream_source(self, kick_pattern_data):
        result = try_decode(io.BytesIO(kick_pattern_data))

        assert result.ok

    def test_truncated(self, kick_pattern_data):
        result = try_decode(kick_pattern_data[:20])

        assert not result.ok
        assert result.pattern is None
        assert isinstance(result.error, TruncatedInput)

    def test_malformed(self, broken_splice_file):
        result = try_decode(broken_splice_file.read_bytes())

        assert isinstance(result.error, MalformedField)
        assert "step 15" in str(result.error)


def test_package_exports():
    """Test the top level API."""
    assert splicedrum.__version__
    for name in ("decode", "decode_bytes", "decode_file", "try_decode", "Pattern", "Track"):
        assert hasattr(splicedrum, name)
