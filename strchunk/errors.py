"""
Errors - Exception types raised by strchunk.

Data errors (invalid or truncated UTF-8) subclass UnicodeDecodeError so
callers can handle them like any other decoding failure. Range, capacity
and ownership faults subclass the built-in exception for the same kind of
programming mistake and are not meant to be caught in normal operation.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .chunk import StrChunk


# ========================================================================
# DATA ERRORS
# ========================================================================

class ExtractUtf8Error(UnicodeDecodeError):
    """
    An invalid UTF-8 sequence was found during extraction.

    The valid content preceding the invalid sequence has already been
    removed from the raw buffer and is available as `chunk`. The invalid
    sequence itself is left at the front of the raw buffer; skip
    `error_len` bytes to resume extraction after it.
    """

    def __init__(self, chunk: "StrChunk", data: bytes, valid_up_to: int,
                 error_len: int, reason: str = "invalid utf-8 sequence"):
        super().__init__('utf-8', data, valid_up_to, valid_up_to + error_len, reason)
        self.chunk = chunk
        self.valid_up_to = valid_up_to
        self.error_len = error_len


class TruncatedUtf8Error(UnicodeDecodeError):
    """The input ended in the middle of a multi-byte UTF-8 sequence."""

    def __init__(self, pending: bytes):
        super().__init__('utf-8', pending, 0, len(pending),
                         'incomplete UTF-8 sequence in input')
        self.pending = pending


# ========================================================================
# PROGRAMMING ERRORS
# ========================================================================

class SplitRangeError(Exception):
    """A range passed to a slicing or splitting operation is unusable."""

    def __init__(self, message: str, split_range=None, index: int = None, length: int = None):
        super().__init__(message)
        self.split_range = split_range
        self.index = index
        self.length = length


class OutOfBoundsError(SplitRangeError, IndexError):
    """A range endpoint lies past the end of the buffer."""


class CharBoundaryError(SplitRangeError, ValueError):
    """A range endpoint falls inside a multi-byte UTF-8 sequence."""


class CapacityError(BufferError):
    """Not enough spare capacity to append without reserving."""

    def __init__(self, needed: int, remaining: int):
        super().__init__(
            f"appending {needed} bytes needs more than the "
            f"{remaining} bytes of remaining capacity"
        )
        self.needed = needed
        self.remaining = remaining


class FrozenBufferError(RuntimeError):
    """The buffer was used after being frozen into a shared chunk."""
