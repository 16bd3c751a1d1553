"""
StrChunk - Immutable, shareable view over UTF-8 text in memory.

A StrChunk references a region of a byte storage block. Handles are
cheap to copy and to slice: slices reference the same storage, which is
kept alive for as long as any handle still points into it. The bytes a
StrChunk references are always valid UTF-8 and are never modified.
"""

import functools
from typing import Iterable, Optional

from .boundary import check_char_boundary
from .bytebuf import ByteBuffer
from .errors import OutOfBoundsError
from .split import TakeRange
from .text import TextValue


@functools.lru_cache(maxsize=256)
def _encode_static(text: str) -> bytes:
    return text.encode('utf-8')


class StrChunk(TextValue, TakeRange):
    """
    A reference-counted, immutable UTF-8 string slice.

    Lengths and indices are in bytes of the UTF-8 encoding, not in
    characters. Equality, ordering and hashing follow the decoded text.
    """

    __slots__ = ('_owner', '_start', '_stop', '_text')

    def __init__(self, text: str = ""):
        # Storage is per chunk; slice_ref relies on its identity.
        owner = bytearray(text, 'utf-8')
        self._owner = owner
        self._start = 0
        self._stop = len(owner)
        self._text: Optional[str] = text

    @classmethod
    def _from_parts(cls, owner, start: int, stop: int, text: Optional[str] = None) -> "StrChunk":
        """Build a chunk over bytes the caller has already validated as UTF-8."""
        chunk = cls.__new__(cls)
        chunk._owner = owner
        chunk._start = start
        chunk._stop = stop
        chunk._text = text
        return chunk

    @classmethod
    def _from_buffer(cls, buf: ByteBuffer, text: Optional[str] = None) -> "StrChunk":
        """Take over the region of a ByteBuffer holding validated UTF-8."""
        storage, start, stop = buf.into_parts()
        return cls._from_parts(storage, start, stop, text)

    # ========================================================================
    # CONSTRUCTORS
    # ========================================================================

    @classmethod
    def from_static(cls, text: str) -> "StrChunk":
        """
        Create a chunk for a constant string.

        The encoding of recently used constants is cached, so repeated
        calls with the same string share one storage block.
        """
        owner = _encode_static(text)
        return cls._from_parts(owner, 0, len(owner), text)

    @classmethod
    def from_str(cls, text: str) -> "StrChunk":
        """Create a chunk holding a copy of `text`."""
        return cls(text)

    @classmethod
    def from_bytes(cls, data) -> "StrChunk":
        """
        Create a chunk from UTF-8 encoded bytes.

        Raises UnicodeDecodeError if `data` is not valid UTF-8. A
        ByteBuffer is taken over without copying and left empty; an
        immutable `bytes` object is shared; other bytes-like objects
        are copied.
        """
        if isinstance(data, ByteBuffer):
            text = str(data.memoryview(), 'utf-8')
            return cls._from_buffer(data, text)
        owner = data if isinstance(data, bytes) else bytes(data)
        text = owner.decode('utf-8')
        return cls._from_parts(owner, 0, len(owner), text)

    @classmethod
    def from_chars(cls, chars: Iterable[str]) -> "StrChunk":
        """Create a chunk from an iterable of single characters."""
        from .chunk_mut import StrChunkMut
        return StrChunkMut.from_chars(chars).freeze()

    @classmethod
    def extract_utf8(cls, raw: ByteBuffer) -> "StrChunk":
        """Extract the longest valid UTF-8 prefix of `raw`; see `strchunk.extract.extract_utf8`."""
        from .extract import extract_utf8
        return extract_utf8(raw)

    # ========================================================================
    # ACCESS
    # ========================================================================

    def __len__(self) -> int:
        return self._stop - self._start

    def as_str(self) -> str:
        """Return the content as a `str`, decoding it on first use."""
        if self._text is None:
            self._text = str(self.as_bytes(), 'utf-8')
        return self._text

    def as_bytes(self) -> memoryview:
        """Read-only view over the UTF-8 bytes, without copying."""
        return memoryview(self._owner)[self._start:self._stop].toreadonly()

    def __bytes__(self) -> bytes:
        return bytes(self.as_bytes())

    def __copy__(self) -> "StrChunk":
        return StrChunk._from_parts(self._owner, self._start, self._stop, self._text)

    # ========================================================================
    # SLICING
    # ========================================================================

    def slice(self, start: int = 0, stop: Optional[int] = None) -> "StrChunk":
        """
        Return a chunk for bytes `start` to `stop` sharing this chunk's storage.

        Both ends must lie on character boundaries within the chunk.
        """
        if stop is None:
            stop = len(self)
        described = f"[{start}:{stop}]"
        data = self.as_bytes()
        check_char_boundary(data, start, described)
        check_char_boundary(data, stop, described)
        if start > stop:
            raise OutOfBoundsError(
                f"range {described} starts after it ends",
                split_range=described, index=start, length=len(self),
            )
        return StrChunk._from_parts(self._owner, self._start + start, self._start + stop)

    def slice_ref(self, subset: "StrChunk") -> "StrChunk":
        """
        Return a chunk equivalent to `subset`, which must reference a part of this chunk.

        Raises ValueError if `subset` is backed by different storage or
        reaches outside this chunk.
        Chunks from `from_static` with the same text, and chunks made by
        `from_bytes` over the same `bytes` object, share storage and are
        accepted.
        """
        if not isinstance(subset, StrChunk):
            raise TypeError(f"expected a StrChunk, got {type(subset).__name__}")
        if not subset:
            return StrChunk()
        if (subset._owner is not self._owner
                or subset._start < self._start
                or subset._stop > self._stop):
            raise ValueError(f"{subset!r} is not a slice of {self!r}")
        return StrChunk._from_parts(self._owner, subset._start, subset._stop, subset._text)

    def _split_to(self, at: int) -> "StrChunk":
        head = StrChunk._from_parts(self._owner, self._start, self._start + at)
        self._start += at
        self._text = None
        return head

    def _split_off(self, at: int) -> "StrChunk":
        tail = StrChunk._from_parts(self._owner, self._start + at, self._stop)
        self._stop = self._start + at
        self._text = None
        return tail
