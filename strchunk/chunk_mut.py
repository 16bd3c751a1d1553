"""
StrChunkMut - Uniquely owned, growable UTF-8 string buffer.

StrChunkMut builds on ByteBuffer with the added guarantee that its
initialized content is valid UTF-8. It is filled by appending characters
and strings and turned into a shareable StrChunk with `freeze()`.
"""

import operator
from typing import Iterable

from .boundary import check_char_boundary
from .bytebuf import ByteBuffer
from .chunk import StrChunk
from .errors import FrozenBufferError
from .split import TakeRange
from .text import TextValue

# Room reserved past the size hint in `from_chars` so the first few
# characters never reallocate.
FROM_CHARS_OVERHEAD = 5

# Longest UTF-8 encoding of a single code point.
MAX_CHAR_LEN = 4


class StrChunkMut(TextValue, TakeRange):
    """
    A unique reference to a contiguous, growable UTF-8 buffer.

    Lengths and capacities are in bytes. Once frozen, the handle gives up
    its content and any further use raises FrozenBufferError.
    """

    __slots__ = ('_buf',)

    def __init__(self, text: str = ""):
        self._buf = ByteBuffer(text.encode('utf-8'))

    @classmethod
    def _from_buffer(cls, buf: ByteBuffer) -> "StrChunkMut":
        chunk = cls.__new__(cls)
        chunk._buf = buf
        return chunk

    # ========================================================================
    # CONSTRUCTORS
    # ========================================================================

    @classmethod
    def with_capacity(cls, capacity: int) -> "StrChunkMut":
        """Create an empty buffer able to hold `capacity` bytes without reallocating."""
        return cls._from_buffer(ByteBuffer.with_capacity(capacity))

    @classmethod
    def from_str(cls, text: str) -> "StrChunkMut":
        return cls(text)

    @classmethod
    def from_bytes(cls, data) -> "StrChunkMut":
        """
        Create a buffer from UTF-8 encoded bytes.

        Raises UnicodeDecodeError if `data` is not valid UTF-8. A
        ByteBuffer is taken over as is; other bytes-like objects are
        copied.
        """
        if isinstance(data, ByteBuffer):
            str(data.memoryview(), 'utf-8')
            return cls._from_buffer(data.split_off(0))
        str(memoryview(data), 'utf-8')
        return cls._from_buffer(ByteBuffer(data))

    @classmethod
    def from_chars(cls, chars: Iterable[str]) -> "StrChunkMut":
        """
        Create a buffer from an iterable of single characters.

        Capacity for the iterable's length hint is reserved up front and
        at least four bytes are reserved before every further character.
        """
        hint = operator.length_hint(chars)
        iterator = iter(chars)
        first = next(iterator, None)
        if first is None:
            return cls()
        buf = cls.with_capacity(hint + FROM_CHARS_OVERHEAD)
        buf.put_char(first)
        for char in iterator:
            buf.reserve(MAX_CHAR_LEN)
            buf.put_char(char)
        return buf

    # ========================================================================
    # SIZE AND CAPACITY
    # ========================================================================

    def __repr__(self) -> str:
        if self._buf is None:
            return f"{type(self).__name__}(<frozen>)"
        return super().__repr__()

    def _bytes(self) -> ByteBuffer:
        if self._buf is None:
            raise FrozenBufferError("StrChunkMut has already been frozen")
        return self._buf

    def __len__(self) -> int:
        return len(self._bytes())

    @property
    def capacity(self) -> int:
        """Total bytes this buffer can hold without reallocating."""
        return self._bytes().capacity

    @property
    def remaining(self) -> int:
        """Bytes that can be appended without reallocating."""
        return self._bytes().remaining

    def reserve(self, additional: int) -> None:
        """Reserve room for at least `additional` more bytes of text."""
        self._bytes().reserve(additional)

    # ========================================================================
    # APPENDING
    # ========================================================================

    def put_char(self, char: str) -> None:
        """
        Append one character without reserving capacity.

        Raises CapacityError if the remaining capacity cannot hold its
        encoding; reserving four bytes beforehand is always enough.
        """
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        self._bytes().put_slice(char.encode('utf-8'))

    def put_str(self, text: str) -> None:
        """Append a string without reserving capacity; raises CapacityError if it does not fit."""
        self._bytes().put_slice(text.encode('utf-8'))

    def push_char(self, char: str) -> None:
        """Append one character, reserving capacity as needed."""
        self.reserve(MAX_CHAR_LEN)
        self.put_char(char)

    def push_str(self, text: str) -> None:
        """Append a string, reserving capacity as needed."""
        self._bytes().extend(text.encode('utf-8'))

    # ========================================================================
    # ACCESS
    # ========================================================================

    def as_str(self) -> str:
        return str(self._bytes().memoryview(), 'utf-8')

    def as_bytes(self) -> memoryview:
        """Read-only view over the UTF-8 bytes, valid until the buffer is next modified."""
        return self._bytes().memoryview()

    def __bytes__(self) -> bytes:
        return bytes(self._bytes())

    # ========================================================================
    # CONVERSIONS
    # ========================================================================

    def freeze(self) -> StrChunk:
        """
        Convert this buffer into an immutable StrChunk without copying.

        The returned chunk takes over the content; this handle cannot be
        used afterwards.
        """
        buf = self._bytes()
        self._buf = None
        return StrChunk._from_buffer(buf)

    def into_byte_buffer(self) -> ByteBuffer:
        """Give up the content as a raw ByteBuffer; this handle cannot be used afterwards."""
        buf = self._bytes()
        self._buf = None
        return buf

    # ========================================================================
    # RANGE OPERATIONS
    # ========================================================================

    def truncate(self, length: int) -> None:
        """
        Shorten the content to `length` bytes.

        `length` must lie on a character boundary; lengths past the end
        leave the buffer unchanged.
        """
        buf = self._bytes()
        if length >= len(buf):
            return
        check_char_boundary(buf.memoryview(), length, f"[:{length}]")
        buf.truncate(length)

    def clear(self) -> None:
        self._bytes().clear()

    def _split_to(self, at: int) -> "StrChunkMut":
        return StrChunkMut._from_buffer(self._bytes().split_to(at))

    def _split_off(self, at: int) -> "StrChunkMut":
        return StrChunkMut._from_buffer(self._bytes().split_off(at))
