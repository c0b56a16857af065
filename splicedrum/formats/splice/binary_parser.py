"""
SPLICE binary pattern parser.

Decodes the binary structure of SPLICE drum machine pattern files.

SPLICE File Structure:
    Offset  Size    Description
    0x00    6       Magic "SPLICE"
    0x06    8       Body size (big-endian, counts every byte after this field)
    0x0E    32      Hardware version, NUL padded
    0x2E    4       Tempo (float32, little-endian)
    0x32    ...     Track records until the body size is used up

Track record:
    Size    Description
    1       Track id
    4       Name length N (big-endian)
    N       Name bytes
    16      Steps, one byte each (0 = silent, 1 = triggered)

Anything after the declared body (e.g. padding) is ignored.
"""

import io
import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from splicedrum.errors import (
    HeaderMismatch,
    MalformedField,
    TruncatedInput,
    UnderlyingIOFailure,
)
from splicedrum.models.pattern import Pattern
from splicedrum.models.track import Steps, Track

logger = logging.getLogger(__name__)

# Upper bound on a single stream.read() request
READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class FieldSpan:
    """Location of one decoded field within the file."""

    name: str
    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size


def _read_fully(stream: BinaryIO, size: int, field: str, offset: int) -> bytes:
    """
    Read up to ``size`` bytes in chunks, retrying on short reads.

    Returns fewer than ``size`` bytes only when the stream is exhausted.

    Raises:
        UnderlyingIOFailure: If the stream raises OSError
    """
    chunks = []
    remaining = size
    while remaining > 0:
        try:
            chunk = stream.read(min(remaining, READ_CHUNK_SIZE))
        except OSError as exc:
            raise UnderlyingIOFailure(field, f"read failed ({exc})", offset=offset) from exc
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class BoundedReader:
    """
    Reader that allows at most ``limit`` bytes to be taken from a stream.

    Every read is exact: asking for more bytes than the budget or the
    stream can supply raises TruncatedInput.
    """

    def __init__(self, stream: BinaryIO, limit: int, start_offset: int = 0):
        self.stream = stream
        self.limit = limit
        self.remaining = limit
        self.offset = start_offset

    @property
    def consumed(self) -> int:
        return self.limit - self.remaining

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def read_exact(self, size: int, field: str) -> bytes:
        """
        Read exactly ``size`` bytes.

        Args:
            size: Number of bytes to read
            field: Field name used in error messages

        Returns:
            The bytes read

        Raises:
            TruncatedInput: If the budget or the stream runs out first
            UnderlyingIOFailure: If the stream raises OSError
        """
        if size > self.remaining:
            raise TruncatedInput(
                field,
                "field runs past the declared body size",
                offset=self.offset,
                expected=f"{size} bytes",
                actual=f"{self.remaining} bytes left in body",
            )

        data = _read_fully(self.stream, size, field, self.offset)
        if len(data) != size:
            raise TruncatedInput(
                field,
                "unexpected end of data",
                offset=self.offset,
                expected=f"{size} bytes",
                actual=f"{len(data)} bytes",
            )

        self.remaining -= size
        self.offset += size
        return data


class SpliceParser:
    """
    Parser for SPLICE binary pattern files.

    A parser instance holds the state of one decode; create a new one
    per input (the module level ``decode`` helpers do this).

    Example:
        parser = SpliceParser()
        pattern = parser.parse_file("pattern_1.splice")
    """

    # File structure constants
    HEADER_MAGIC = b"SPLICE"
    HEADER_SIZE = 6
    BODY_SIZE_FORMAT = ">Q"
    BODY_SIZE_SIZE = 8
    VERSION_SIZE = 32
    TEMPO_FORMAT = "<f"
    TEMPO_SIZE = 4
    TRACK_ID_SIZE = 1
    NAME_LENGTH_FORMAT = ">I"
    NAME_LENGTH_SIZE = 4
    STEP_COUNT = 16

    BODY_OFFSET = HEADER_SIZE + BODY_SIZE_SIZE

    def __init__(self):
        self.declared_size: Optional[int] = None
        self.fields: List[FieldSpan] = []
        self.pattern: Optional[Pattern] = None
        self._reader: Optional[BoundedReader] = None

    def parse_file(self, filepath: str) -> Pattern:
        """
        Parse a SPLICE file.

        Args:
            filepath: Path to the .splice file

        Returns:
            Decoded Pattern
        """
        with open(filepath, "rb") as f:
            return self.parse_stream(f)

    def parse_bytes(self, data: bytes) -> Pattern:
        """
        Parse SPLICE data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Decoded Pattern
        """
        return self.parse_stream(io.BytesIO(data))

    def parse_stream(self, stream: BinaryIO) -> Pattern:
        """
        Parse SPLICE data from a binary stream positioned at byte 0.

        Args:
            stream: Object with a ``read(size)`` method returning bytes

        Returns:
            Decoded Pattern

        Raises:
            HeaderMismatch: Magic bytes are not "SPLICE"
            TruncatedInput: A field needs more bytes than are available
            MalformedField: A field holds a value the format forbids
            UnderlyingIOFailure: The stream raised an I/O error
        """
        self.fields = []
        self.pattern = None

        self._check_header(stream)
        self.declared_size = self._read_body_size(stream)
        self._reader = BoundedReader(stream, self.declared_size, self.BODY_OFFSET)

        version = self._decode_version()
        tempo = self._decode_tempo()

        tracks = []
        while not self._reader.exhausted:
            tracks.append(self._decode_track(len(tracks)))

        logger.debug(
            "Decoded %d tracks using %d of %d body bytes",
            len(tracks),
            self._reader.consumed,
            self.declared_size,
        )

        self.pattern = Pattern(version=version, tempo=tempo, tracks=tracks)
        return self.pattern

    def _record(self, name: str, offset: int, size: int) -> None:
        self.fields.append(FieldSpan(name=name, offset=offset, size=size))

    def _check_header(self, stream: BinaryIO) -> None:
        """Read and verify the 6 byte magic."""
        magic = _read_fully(stream, self.HEADER_SIZE, "header", 0)
        if len(magic) != self.HEADER_SIZE:
            raise TruncatedInput(
                "header",
                "file too short for SPLICE header",
                offset=0,
                expected=f"{self.HEADER_SIZE} bytes",
                actual=f"{len(magic)} bytes",
            )
        if magic != self.HEADER_MAGIC:
            raise HeaderMismatch(
                "header",
                "invalid SPLICE header",
                offset=0,
                expected=repr(self.HEADER_MAGIC),
                actual=repr(magic),
            )
        self._record("header", 0, self.HEADER_SIZE)

    def _read_body_size(self, stream: BinaryIO) -> int:
        """Read the big-endian body size that bounds the rest of the decode."""
        raw = _read_fully(stream, self.BODY_SIZE_SIZE, "body_size", self.HEADER_SIZE)
        if len(raw) != self.BODY_SIZE_SIZE:
            raise TruncatedInput(
                "body_size",
                "unexpected end of data",
                offset=self.HEADER_SIZE,
                expected=f"{self.BODY_SIZE_SIZE} bytes",
                actual=f"{len(raw)} bytes",
            )
        size = struct.unpack(self.BODY_SIZE_FORMAT, raw)[0]
        self._record("body_size", self.HEADER_SIZE, self.BODY_SIZE_SIZE)
        logger.debug("Declared body size: %d bytes", size)
        return size

    def _decode_version(self) -> str:
        """Decode the NUL terminated version string from its 32 byte slot."""
        offset = self._reader.offset
        raw = self._reader.read_exact(self.VERSION_SIZE, "version")

        end = raw.find(b"\x00")
        if end < 0:
            raise MalformedField(
                "version",
                "missing NUL terminator",
                offset=offset,
                expected="NUL within 32 bytes",
                actual=repr(raw),
            )

        self._record("version", offset, self.VERSION_SIZE)
        version = raw[:end].decode("utf-8", errors="replace")
        logger.debug("Version: %r", version)
        return version

    def _decode_tempo(self) -> float:
        """Decode the little-endian float32 tempo."""
        offset = self._reader.offset
        raw = self._reader.read_exact(self.TEMPO_SIZE, "tempo")
        tempo = struct.unpack(self.TEMPO_FORMAT, raw)[0]
        self._record("tempo", offset, self.TEMPO_SIZE)
        logger.debug("Tempo: %s", tempo)
        return tempo

    def _decode_track(self, index: int) -> Track:
        """
        Decode one track record.

        Args:
            index: Position of the track in the file, for error messages

        Returns:
            Decoded Track
        """
        prefix = f"track[{index}]"
        reader = self._reader

        offset = reader.offset
        track_id = reader.read_exact(self.TRACK_ID_SIZE, f"{prefix}.id")[0]
        self._record(f"{prefix}.id", offset, self.TRACK_ID_SIZE)

        offset = reader.offset
        raw_length = reader.read_exact(self.NAME_LENGTH_SIZE, f"{prefix}.name_length")
        name_length = struct.unpack(self.NAME_LENGTH_FORMAT, raw_length)[0]
        self._record(f"{prefix}.name_length", offset, self.NAME_LENGTH_SIZE)

        offset = reader.offset
        raw_name = reader.read_exact(name_length, f"{prefix}.name")
        self._record(f"{prefix}.name", offset, name_length)

        offset = reader.offset
        raw_steps = reader.read_exact(self.STEP_COUNT, f"{prefix}.steps")
        for step_index, value in enumerate(raw_steps):
            if value not in (0, 1):
                raise MalformedField(
                    f"{prefix}.steps",
                    f"invalid value at step {step_index}",
                    offset=offset + step_index,
                    expected="0 or 1",
                    actual=str(value),
                )
        self._record(f"{prefix}.steps", offset, self.STEP_COUNT)

        track = Track(
            id=track_id,
            name=raw_name.decode("utf-8", errors="replace"),
            steps=Steps.from_bytes(raw_steps),
            raw_name=raw_name,
        )
        logger.debug("Track %d: id=%d name=%r steps=%s", index, track.id, track.name, track.steps)
        return track

    def dump_structure(self) -> str:
        """
        Generate a text dump of the decoded field layout for debugging.

        Returns:
            Formatted structure description
        """
        lines = ["SPLICE File Structure:"]
        if self.declared_size is not None:
            lines.append(f"  Declared body size: {self.declared_size} bytes")
        if self.pattern is not None:
            lines.append(f"  Tracks: {self.pattern.track_count}")

        lines.append("")
        lines.append("  Fields:")
        for span in self.fields:
            lines.append(f"    {span.name:24} @ 0x{span.offset:04X}: {span.size:4d} bytes")

        return "\n".join(lines)


def decode(stream: BinaryIO) -> Pattern:
    """
    Decode a SPLICE pattern from a binary stream.

    Args:
        stream: Binary stream positioned at the start of the file

    Returns:
        Decoded Pattern
    """
    return SpliceParser().parse_stream(stream)


def decode_bytes(data: bytes) -> Pattern:
    """
    Decode a SPLICE pattern held in memory.

    Args:
        data: Raw file contents

    Returns:
        Decoded Pattern
    """
    return SpliceParser().parse_bytes(data)
