"""
Reader - Read UTF-8 text chunks from binary streams.

Utf8Reader wraps a binary file-like object and AsyncUtf8Reader wraps an
asyncio stream. Both accumulate bytes in a ByteBuffer and call
`extract_utf8` after every read, so each chunk they return is complete
UTF-8 text whose bytes were never copied after being read.

The stream ending while part of a multi-byte sequence is still buffered
raises TruncatedUtf8Error. Invalid input raises ExtractUtf8Error under
the default "strict" policy; under "replace" the invalid bytes are
skipped and U+FFFD is put in their place.
"""

import logging
from typing import AsyncIterator, Iterator, List

from .bytebuf import ByteBuffer
from .chunk import StrChunk
from .chunk_mut import StrChunkMut
from .errors import ExtractUtf8Error, TruncatedUtf8Error
from .extract import extract_utf8

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_CAPACITY = 8 * 1024

# Every read must have room for at least one complete code point.
MIN_READ_RESERVE = 4

ERROR_POLICIES = ("strict", "replace")

REPLACEMENT_CHARACTER = "\ufffd"


class _Utf8Decoding:
    """Buffer handling shared by the sync and async readers."""

    def __init__(self, capacity: int = DEFAULT_BUFFER_CAPACITY, errors: str = "strict"):
        if errors not in ERROR_POLICIES:
            raise ValueError(f"unknown error policy {errors!r}; expected one of {ERROR_POLICIES}")
        if capacity < MIN_READ_RESERVE:
            raise ValueError(f"capacity must be at least {MIN_READ_RESERVE} bytes")
        self.capacity = capacity
        self.errors = errors
        self._buf = ByteBuffer.with_capacity(capacity)

    @property
    def pending(self) -> int:
        """Number of bytes read but not yet returned as text."""
        return len(self._buf)

    def _read_size(self) -> int:
        """Make room for the next read and return how many bytes it may fill."""
        if self._buf.remaining < MIN_READ_RESERVE:
            self._buf.reserve(self.capacity)
        return self._buf.remaining

    def skip(self, count: int) -> None:
        """
        Discard `count` pending bytes.

        After a strict read raises ExtractUtf8Error, `skip(error.error_len)`
        drops the invalid sequence so the next read can continue past it.
        """
        self._buf.advance_start(count)

    def _decode(self, bytes_read: int) -> StrChunk:
        chunk = self._extract()
        # No new input and leftover bytes: the stream ended mid-sequence.
        if bytes_read == 0 and not chunk and self._buf:
            return self._end_truncated()
        return chunk

    def _extract(self) -> StrChunk:
        if self.errors == "strict":
            return extract_utf8(self._buf)

        parts: List[StrChunk] = []
        while True:
            try:
                parts.append(extract_utf8(self._buf))
                break
            except ExtractUtf8Error as exc:
                logger.warning("Replacing %d invalid byte(s) in UTF-8 input", exc.error_len)
                parts.append(exc.chunk)
                parts.append(StrChunk.from_static(REPLACEMENT_CHARACTER))
                self._buf.advance_start(exc.error_len)
        return _join(parts)

    def _end_truncated(self) -> StrChunk:
        pending = bytes(self._buf)
        self._buf.clear()
        logger.debug("Stream ended with %d byte(s) of an incomplete UTF-8 sequence", len(pending))
        if self.errors == "strict":
            raise TruncatedUtf8Error(pending)
        logger.warning("Replacing incomplete UTF-8 sequence at end of stream")
        return StrChunk.from_static(REPLACEMENT_CHARACTER)


def _join(parts: List[StrChunk]) -> StrChunk:
    """Concatenate chunks, avoiding a copy when only one is non-empty."""
    non_empty = [part for part in parts if part]
    if not non_empty:
        return StrChunk()
    if len(non_empty) == 1:
        return non_empty[0]
    joined = StrChunkMut.with_capacity(sum(len(part) for part in non_empty))
    for part in non_empty:
        joined.put_str(part.as_str())
    return joined.freeze()


class Utf8Reader(_Utf8Decoding):
    """
    Read UTF-8 text from a binary file-like object.

    The stream needs a `readinto` or `read` method. Iterating the reader
    yields non-empty chunks until the end of the stream.
    """

    def __init__(self, stream, capacity: int = DEFAULT_BUFFER_CAPACITY, errors: str = "strict"):
        super().__init__(capacity, errors)
        self._stream = stream

    def _fill(self) -> int:
        size = self._read_size()
        readinto = getattr(self._stream, "readinto", None)
        if readinto is not None:
            with self._buf.spare() as spare:
                count = readinto(spare) or 0
            self._buf.advance(count)
            return count
        data = self._stream.read(size)
        self._buf.put_slice(data)
        return len(data)

    def read_utf8(self) -> StrChunk:
        """
        Read the next chunk of text.

        Blocks until at least one complete character is available and
        returns an empty chunk at the end of the stream.
        """
        while True:
            bytes_read = self._fill()
            chunk = self._decode(bytes_read)
            if chunk or bytes_read == 0:
                if bytes_read == 0:
                    logger.debug("End of UTF-8 stream")
                return chunk

    def __iter__(self) -> Iterator[StrChunk]:
        while True:
            chunk = self.read_utf8()
            if not chunk:
                return
            yield chunk


class AsyncUtf8Reader(_Utf8Decoding):
    """
    Read UTF-8 text from an asyncio stream.

    The stream needs an `async read(n)` method returning bytes, as
    `asyncio.StreamReader` provides. Use `async for` to receive
    non-empty chunks until the end of the stream.
    """

    def __init__(self, stream, capacity: int = DEFAULT_BUFFER_CAPACITY, errors: str = "strict"):
        super().__init__(capacity, errors)
        self._stream = stream

    async def _fill(self) -> int:
        data = await self._stream.read(self._read_size())
        self._buf.put_slice(data)
        return len(data)

    async def read_utf8(self) -> StrChunk:
        """Read the next chunk of text; an empty chunk marks the end of the stream."""
        while True:
            bytes_read = await self._fill()
            chunk = self._decode(bytes_read)
            if chunk or bytes_read == 0:
                if bytes_read == 0:
                    logger.debug("End of UTF-8 stream")
                return chunk

    def __aiter__(self) -> AsyncIterator[StrChunk]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[StrChunk]:
        while True:
            chunk = await self.read_utf8()
            if not chunk:
                return
            yield chunk
