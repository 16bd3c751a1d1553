"""Test the raw ByteBuffer: capacity, appends and zero-copy splitting."""

import pytest

from strchunk import ByteBuffer, CapacityError


class TestCapacity:
    """Test length, capacity and reservation."""

    def test_empty_buffer(self):
        """A new buffer has no content and no capacity."""
        buf = ByteBuffer()
        assert len(buf) == 0
        assert buf.capacity == 0
        assert buf.remaining == 0

    def test_with_capacity(self):
        """with_capacity reserves spare room without initializing it."""
        buf = ByteBuffer.with_capacity(16)
        assert len(buf) == 0
        assert buf.capacity == 16
        assert buf.remaining == 16

    def test_reserve_keeps_content(self):
        """Reallocating copies the initialized bytes into the new storage."""
        buf = ByteBuffer(b"abc")
        buf.reserve(100)
        assert buf.remaining >= 100
        assert bytes(buf) == b"abc"

    def test_reserve_within_capacity_is_noop(self):
        """Reserving less than the spare room changes nothing."""
        buf = ByteBuffer.with_capacity(8)
        buf.reserve(4)
        assert buf.capacity == 8

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            ByteBuffer.with_capacity(-1)


class TestWriting:
    """Test appending into the buffer."""

    def test_put_slice_within_capacity(self):
        buf = ByteBuffer.with_capacity(5)
        buf.put_slice(b"Hello")
        assert bytes(buf) == b"Hello"
        assert buf.remaining == 0

    def test_put_slice_over_capacity(self):
        """put_slice never reallocates."""
        buf = ByteBuffer.with_capacity(2)
        with pytest.raises(CapacityError) as exc_info:
            buf.put_slice(b"abc")
        assert exc_info.value.needed == 3
        assert exc_info.value.remaining == 2
        assert len(buf) == 0

    def test_extend_grows(self):
        buf = ByteBuffer()
        buf.extend(b"Hello, ")
        buf.extend(b"world")
        assert bytes(buf) == b"Hello, world"

    def test_spare_and_advance(self):
        """Bytes written into spare() become content after advance()."""
        buf = ByteBuffer.with_capacity(8)
        with buf.spare() as spare:
            spare[:3] = b"xyz"
        buf.advance(3)
        assert bytes(buf) == b"xyz"
        assert buf.remaining == 5

    def test_advance_past_capacity(self):
        buf = ByteBuffer.with_capacity(2)
        with pytest.raises(CapacityError):
            buf.advance(3)


class TestSplitting:
    """Test moving regions between handles."""

    def test_split_to(self):
        buf = ByteBuffer(b"Hello World")
        head = buf.split_to(6)
        assert bytes(head) == b"Hello "
        assert bytes(buf) == b"World"

    def test_split_off(self):
        buf = ByteBuffer(b"Hello World")
        tail = buf.split_off(5)
        assert bytes(buf) == b"Hello"
        assert bytes(tail) == b" World"

    def test_take_keeps_spare_capacity(self):
        """take() moves all content out and leaves the spare room behind."""
        buf = ByteBuffer.with_capacity(10)
        buf.put_slice(b"abcd")
        taken = buf.take()
        assert bytes(taken) == b"abcd"
        assert len(buf) == 0
        assert buf.remaining == 6

    def test_split_regions_are_independent(self):
        """Writing to the remainder never changes the split-off head."""
        buf = ByteBuffer.with_capacity(8)
        buf.put_slice(b"ab")
        head = buf.split_to(2)
        buf.put_slice(b"cd")
        head.extend(b"XY")
        assert bytes(head) == b"abXY"
        assert bytes(buf) == b"cd"

    def test_split_out_of_bounds(self):
        buf = ByteBuffer(b"abc")
        with pytest.raises(IndexError):
            buf.split_to(4)
        assert bytes(buf) == b"abc"

    def test_advance_start(self):
        buf = ByteBuffer(b"\xffabc")
        buf.advance_start(1)
        assert bytes(buf) == b"abc"

    def test_truncate_and_clear(self):
        buf = ByteBuffer(b"abcdef")
        buf.truncate(10)
        assert bytes(buf) == b"abcdef"
        buf.truncate(3)
        assert bytes(buf) == b"abc"
        buf.clear()
        assert len(buf) == 0

    def test_into_parts_surrenders_region(self):
        buf = ByteBuffer(b"abc")
        storage, start, stop = buf.into_parts()
        assert bytes(storage[start:stop]) == b"abc"
        assert len(buf) == 0
        assert buf.capacity == 0


def test_memoryview_is_read_only():
    """The content view cannot be used to modify the buffer."""
    buf = ByteBuffer(b"abc")
    view = buf.memoryview()
    assert view.readonly
    assert view == b"abc"


def test_equality_with_bytes():
    assert ByteBuffer(b"abc") == b"abc"
    assert ByteBuffer(b"abc") == ByteBuffer(b"abc")
    assert ByteBuffer(b"abc") != b"abd"
