"""
Exceptions raised while decoding SPLICE pattern data.

Every decoding failure derives from SpliceDecodeError, which itself is a
ValueError so callers that only care about "bad file" can catch that.
"""

from typing import Optional


class SpliceDecodeError(ValueError):
    """
    Base class for SPLICE decoding failures.

    Attributes:
        field: Name of the field being decoded when the error occurred
        offset: Absolute byte offset of that field, when known
        expected: Human readable description of what was expected
        actual: Human readable description of what was found
    """

    def __init__(
        self,
        field: str,
        detail: str,
        offset: Optional[int] = None,
        expected: str = "",
        actual: str = "",
    ):
        self.field = field
        self.detail = detail
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"{self.field}: {self.detail}"
        if self.expected or self.actual:
            message += f" (expected {self.expected}, got {self.actual})"
        if self.offset is not None:
            message += f" at offset 0x{self.offset:X}"
        return message


class FormatError(SpliceDecodeError):
    """The bytes are present but do not follow the SPLICE layout."""


class HeaderMismatch(FormatError):
    """The first 6 bytes are not the SPLICE magic."""


class MalformedField(FormatError):
    """A field holds a value the format does not allow."""


class TruncatedInput(SpliceDecodeError):
    """Fewer bytes were available than a field requires."""


class UnderlyingIOFailure(SpliceDecodeError):
    """The byte source itself raised an I/O error."""


TruncatedError = TruncatedInput

__all__ = [
    "SpliceDecodeError",
    "FormatError",
    "HeaderMismatch",
    "MalformedField",
    "TruncatedInput",
    "TruncatedError",
    "UnderlyingIOFailure",
]
