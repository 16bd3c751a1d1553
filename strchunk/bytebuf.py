"""
ByteBuffer - Growable byte buffer with zero-copy splitting.

A ByteBuffer is a handle to a region of a `bytearray` storage block.
Splitting a buffer hands part of the region to a new handle without
copying; both handles keep referencing the same storage, and the storage
is released when the last handle (or chunk frozen from one) goes away.

The storage block is never resized in place. Growing a buffer allocates
a new block and copies the initialized bytes, so a region that has been
split off or frozen is never moved or overwritten by another handle.
"""

import logging
from typing import Tuple

from .errors import CapacityError

logger = logging.getLogger(__name__)


class ByteBuffer:
    """
    A uniquely owned, growable buffer of raw bytes.

    The handle owns `capacity` bytes of storage starting at its offset.
    The first `len(buffer)` of those are initialized; the rest is spare
    capacity that can be filled by `put_slice`, `extend` or by writing
    into `spare()` and calling `advance()`.
    """

    __slots__ = ('_storage', '_start', '_len', '_cap')

    def __init__(self, data=b''):
        self._storage = bytearray(data)
        self._start = 0
        self._len = len(self._storage)
        self._cap = self._len

    @classmethod
    def with_capacity(cls, capacity: int) -> "ByteBuffer":
        """Create an empty buffer able to hold `capacity` bytes without reallocating."""
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        buf = cls()
        buf._storage = bytearray(capacity)
        buf._cap = capacity
        return buf

    @classmethod
    def from_bytes(cls, data) -> "ByteBuffer":
        """Create a buffer holding a copy of `data`."""
        return cls(data)

    @classmethod
    def _from_region(cls, storage: bytearray, start: int, length: int, cap: int) -> "ByteBuffer":
        buf = cls.__new__(cls)
        buf._storage = storage
        buf._start = start
        buf._len = length
        buf._cap = cap
        return buf

    # ========================================================================
    # SIZE AND CAPACITY
    # ========================================================================

    def __len__(self) -> int:
        return self._len

    @property
    def capacity(self) -> int:
        """Total bytes this handle can hold without reallocating."""
        return self._cap

    @property
    def remaining(self) -> int:
        """Spare capacity past the initialized length."""
        return self._cap - self._len

    def reserve(self, additional: int) -> None:
        """
        Make room for at least `additional` more bytes.

        Reallocates when the spare capacity is too small. The new block is
        at least twice the old capacity, and only initialized bytes are
        copied into it.
        """
        if additional <= self.remaining:
            return
        new_cap = max(self._len + additional, self._cap * 2)
        storage = bytearray(new_cap)
        storage[:self._len] = memoryview(self._storage)[self._start:self._start + self._len]
        logger.debug("Reallocating byte buffer: %d -> %d bytes (%d initialized)",
                     self._cap, new_cap, self._len)
        self._storage = storage
        self._start = 0
        self._cap = new_cap

    # ========================================================================
    # WRITING
    # ========================================================================

    def put_slice(self, data) -> None:
        """
        Append `data` into the spare capacity.

        Raises CapacityError instead of reallocating when there is not
        enough room.
        """
        view = memoryview(data).cast('B')
        needed = view.nbytes
        if needed > self.remaining:
            raise CapacityError(needed, self.remaining)
        end = self._start + self._len
        self._storage[end:end + needed] = view
        self._len += needed

    def extend(self, data) -> None:
        """Append `data`, reserving capacity as needed."""
        self.reserve(memoryview(data).nbytes)
        self.put_slice(data)

    def spare(self) -> memoryview:
        """
        Writable view over the spare capacity.

        Bytes written here only become part of the buffer after `advance()`.
        """
        end = self._start + self._len
        return memoryview(self._storage)[end:self._start + self._cap]

    def advance(self, count: int) -> None:
        """Mark `count` bytes of spare capacity as initialized."""
        if count < 0 or count > self.remaining:
            raise CapacityError(count, self.remaining)
        self._len += count

    # ========================================================================
    # SPLITTING
    # ========================================================================

    def _check_index(self, at: int) -> None:
        if at < 0 or at > self._len:
            raise IndexError(f"split index {at} is out of bounds for a buffer of {self._len} bytes")

    def split_to(self, at: int) -> "ByteBuffer":
        """
        Remove the first `at` bytes and return them as a new buffer.

        No bytes are copied. The returned buffer has no spare capacity;
        this buffer keeps whatever spare capacity it had.
        """
        self._check_index(at)
        head = ByteBuffer._from_region(self._storage, self._start, at, at)
        self._start += at
        self._len -= at
        self._cap -= at
        return head

    def split_off(self, at: int) -> "ByteBuffer":
        """
        Remove the bytes from `at` onwards and return them as a new buffer.

        The returned buffer takes over the spare capacity.
        """
        self._check_index(at)
        tail = ByteBuffer._from_region(
            self._storage, self._start + at, self._len - at, self._cap - at)
        self._len = at
        self._cap = at
        return tail

    def take(self) -> "ByteBuffer":
        """Remove and return all initialized bytes, keeping the spare capacity here."""
        return self.split_to(self._len)

    def advance_start(self, count: int) -> None:
        """Discard the first `count` bytes."""
        self._check_index(count)
        self._start += count
        self._len -= count
        self._cap -= count

    def truncate(self, length: int) -> None:
        """Shorten the buffer to `length` bytes; longer lengths are ignored."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length < self._len:
            self._len = length

    def clear(self) -> None:
        self._len = 0

    # ========================================================================
    # VIEWS
    # ========================================================================

    def memoryview(self) -> memoryview:
        """Read-only view over the initialized bytes."""
        return memoryview(self._storage)[self._start:self._start + self._len].toreadonly()

    def into_parts(self) -> Tuple[bytearray, int, int]:
        """
        Give up this handle's region and return `(storage, start, stop)`.

        After the call the handle is empty with no capacity, so nothing
        written through it can reach the surrendered region.
        """
        parts = (self._storage, self._start, self._start + self._len)
        self._storage = bytearray()
        self._start = 0
        self._len = 0
        self._cap = 0
        return parts

    def __bytes__(self) -> bytes:
        return bytes(self.memoryview())

    def __eq__(self, other) -> bool:
        if isinstance(other, ByteBuffer):
            return self.memoryview() == other.memoryview()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.memoryview() == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"ByteBuffer({bytes(self)!r}, capacity={self._cap})"
