"""Exception hierarchy for the LZ77 codec."""

from __future__ import annotations


class Lz77Error(Exception):
    """
    Base exception for all LZ77 codec errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class Lz77DecodeError(Lz77Error):
    """
    Base class for errors raised while decoding a compressed stream.

    Attributes:
        detail: Description of what went wrong.
        offset: The source byte offset where the error occurred (if known).
    """

    def __init__(self, detail: str, *, offset: int | None = None) -> None:
        self.detail = detail
        self.offset = offset

        msg = detail
        if offset is not None:
            msg = f"{detail} (at byte offset {offset:#x})"

        super().__init__(msg)


class FormatError(Lz77DecodeError):
    """Raised when the header tag byte is not the LZ77 tag."""


class CorruptReferenceError(Lz77DecodeError):
    """
    Raised when a back-reference cannot be satisfied.

    Covers distances beyond the declared output length, windows that start
    before the first output byte, and copies that run past the declared length.
    """


class TruncatedStreamError(Lz77DecodeError):
    """Raised when parsing would read past the end of the source bytes."""


class InputTooLargeError(Lz77Error, ValueError):
    """
    Raised when a raw buffer is too large for the 24-bit length field.

    Attributes:
        length: Size of the rejected buffer.
        limit: The largest accepted size (inclusive).
    """

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Input of {length} bytes exceeds the {limit} byte limit")
