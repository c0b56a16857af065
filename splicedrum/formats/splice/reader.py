"""
SPLICE file reader.

Reads .splice files from disk and hands them to the binary parser.
"""

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from splicedrum.errors import SpliceDecodeError, UnderlyingIOFailure
from splicedrum.formats.splice.binary_parser import SpliceParser
from splicedrum.models.pattern import Pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of a decode that does not raise.

    Exactly one of ``pattern`` and ``error`` is set.
    """

    pattern: Optional[Pattern] = None
    error: Optional[SpliceDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SpliceReader:
    """
    Reader for SPLICE pattern files.

    Example:
        pattern = SpliceReader.read("pattern_1.splice")
        print(f"Version: {pattern.version}, Tempo: {pattern.tempo}")
    """

    def __init__(self):
        self.parser = SpliceParser()

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Pattern:
        """
        Read a SPLICE file and return a Pattern.

        Args:
            filepath: Path to .splice file

        Returns:
            Decoded Pattern
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Pattern:
        """
        Parse a SPLICE file.

        Args:
            filepath: Path to .splice file

        Returns:
            Decoded Pattern

        Raises:
            FileNotFoundError: If the file does not exist
            UnderlyingIOFailure: If the file cannot be opened or read
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        try:
            f = open(filepath, "rb")
        except OSError as exc:
            raise UnderlyingIOFailure("file", f"cannot open {filepath} ({exc})") from exc

        with f:
            pattern = self.parse_stream(f)

        logger.info(
            "Decoded %s: version=%r tempo=%s tracks=%d",
            filepath,
            pattern.version,
            pattern.tempo,
            pattern.track_count,
        )
        return pattern

    def parse_bytes(self, data: bytes) -> Pattern:
        """
        Parse SPLICE data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Decoded Pattern
        """
        return self.parser.parse_bytes(data)

    def parse_stream(self, stream: BinaryIO) -> Pattern:
        """
        Parse SPLICE data from an open binary stream.

        Args:
            stream: Binary stream positioned at byte 0

        Returns:
            Decoded Pattern
        """
        return self.parser.parse_stream(stream)

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like a SPLICE file.

        Args:
            filepath: Path to check

        Returns:
            True if the file starts with the SPLICE magic
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        try:
            with open(filepath, "rb") as f:
                header = f.read(SpliceParser.HEADER_SIZE)
        except OSError:
            return False

        return header == SpliceParser.HEADER_MAGIC

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about a SPLICE file without full decoding.

        Args:
            filepath: Path to .splice file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        info = {
            "valid": False,
            "size": len(data),
            "declared_size": None,
            "trailing_bytes": None,
        }

        header_size = SpliceParser.HEADER_SIZE
        if len(data) >= header_size:
            info["header"] = data[:header_size].decode("ascii", errors="replace")
            info["valid"] = data[:header_size] == SpliceParser.HEADER_MAGIC

        body_offset = SpliceParser.BODY_OFFSET
        if len(data) >= body_offset:
            declared = struct.unpack(SpliceParser.BODY_SIZE_FORMAT, data[header_size:body_offset])[0]
            info["declared_size"] = declared
            info["trailing_bytes"] = len(data) - body_offset - declared

        return info


def decode_file(filepath: Union[str, Path]) -> Pattern:
    """
    Decode the SPLICE file at ``filepath``.

    Args:
        filepath: Path to .splice file

    Returns:
        Decoded Pattern
    """
    return SpliceReader.read(filepath)


def try_decode(source: Union[bytes, BinaryIO]) -> DecodeResult:
    """
    Decode without raising on bad input.

    Args:
        source: Raw bytes or a binary stream positioned at byte 0

    Returns:
        DecodeResult holding either the pattern or the decode error
    """
    parser = SpliceParser()
    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            pattern = parser.parse_bytes(bytes(source))
        else:
            pattern = parser.parse_stream(source)
    except SpliceDecodeError as exc:
        logger.debug("Decode failed: %s", exc)
        return DecodeResult(error=exc)
    return DecodeResult(pattern=pattern)
