"""
splicedrum - Decoder for SPLICE drum machine pattern files.

This library provides tools to:
- Decode binary .splice pattern files into Pattern objects
- Render decoded patterns as text
- Inspect the byte layout of a pattern file

Example usage:
    from splicedrum import decode_file

    pattern = decode_file("pattern_1.splice")
    print(pattern)
"""

__version__ = "0.1.0"
__author__ = "splicedrum Contributors"

from splicedrum.errors import (
    FormatError,
    HeaderMismatch,
    MalformedField,
    SpliceDecodeError,
    TruncatedError,
    TruncatedInput,
    UnderlyingIOFailure,
)
from splicedrum.formats.splice import (
    DecodeResult,
    SpliceParser,
    SpliceReader,
    decode,
    decode_bytes,
    decode_file,
    try_decode,
)
from splicedrum.models.pattern import Pattern
from splicedrum.models.track import Step, Steps, Track

__all__ = [
    "decode",
    "decode_bytes",
    "decode_file",
    "try_decode",
    "DecodeResult",
    "SpliceParser",
    "SpliceReader",
    "Pattern",
    "Track",
    "Step",
    "Steps",
    "SpliceDecodeError",
    "FormatError",
    "HeaderMismatch",
    "MalformedField",
    "TruncatedInput",
    "TruncatedError",
    "UnderlyingIOFailure",
]
