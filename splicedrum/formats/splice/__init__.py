"""SPLICE format handlers."""

from splicedrum.formats.splice.binary_parser import (
    BoundedReader,
    FieldSpan,
    SpliceParser,
    decode,
    decode_bytes,
)
from splicedrum.formats.splice.reader import (
    DecodeResult,
    SpliceReader,
    decode_file,
    try_decode,
)

__all__ = [
    "BoundedReader",
    "FieldSpan",
    "SpliceParser",
    "SpliceReader",
    "DecodeResult",
    "decode",
    "decode_bytes",
    "decode_file",
    "try_decode",
]
