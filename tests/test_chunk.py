"""Test the shared StrChunk: construction, conversion and slicing."""

import copy

import pytest

from strchunk import (
    ByteBuffer,
    CharBoundaryError,
    OutOfBoundsError,
    StrChunk,
    StrChunkMut,
)


class TestConstruction:
    """Test the ways a StrChunk comes into being."""

    def test_empty(self):
        chunk = StrChunk()
        assert len(chunk) == 0
        assert not chunk
        assert chunk == ""

    def test_from_static(self):
        chunk = StrChunk.from_static("Hello")
        assert chunk == "Hello"
        assert len(chunk) == 5

    def test_from_static_reuses_storage(self):
        """The same constant does not allocate new storage each time."""
        first = StrChunk.from_static("status: ok")
        second = StrChunk.from_static("status: ok")
        assert first.as_bytes().obj is second.as_bytes().obj

    def test_from_str_length_is_in_bytes(self):
        """Length counts UTF-8 bytes, not characters."""
        chunk = StrChunk.from_str("Привет")
        assert len(chunk) == 12
        assert chunk.as_str() == "Привет"

    def test_from_bytes_valid(self):
        chunk = StrChunk.from_bytes("Привет".encode("utf-8"))
        assert chunk == "Привет"

    def test_from_bytes_invalid(self):
        """Checked conversion rejects invalid UTF-8."""
        with pytest.raises(UnicodeDecodeError):
            StrChunk.from_bytes(b"abc\xff")

    def test_from_bytes_shares_immutable_bytes(self):
        data = "Hello".encode("utf-8")
        chunk = StrChunk.from_bytes(data)
        assert chunk.as_bytes().obj is data

    def test_from_bytes_copies_bytearray(self):
        """Mutable sources are copied so later changes cannot leak in."""
        data = bytearray(b"Hello")
        chunk = StrChunk.from_bytes(data)
        data[0] = ord("J")
        assert chunk == "Hello"

    def test_from_byte_buffer_takes_over_content(self):
        raw = ByteBuffer(b"Hello")
        chunk = StrChunk.from_bytes(raw)
        assert chunk == "Hello"
        assert len(raw) == 0

    def test_from_byte_buffer_invalid_leaves_buffer(self):
        raw = ByteBuffer(b"\xc3\x28")
        with pytest.raises(UnicodeDecodeError):
            StrChunk.from_bytes(raw)
        assert bytes(raw) == b"\xc3\x28"

    def test_from_chars(self):
        chunk = StrChunk.from_chars(iter("Hé€😀"))
        assert chunk == "Hé€😀"
        assert len(chunk) == 1 + 2 + 3 + 4

    def test_from_chars_empty(self):
        assert StrChunk.from_chars([]) == ""


class TestConversion:
    """Test getting content back out."""

    def test_str(self):
        assert str(StrChunk("Hello")) == "Hello"

    def test_bytes(self):
        assert bytes(StrChunk("Привет")) == "Привет".encode("utf-8")

    def test_as_bytes_is_read_only_view(self):
        view = StrChunk("Hello").as_bytes()
        assert view.readonly
        assert view == b"Hello"

    def test_repr(self):
        assert repr(StrChunk("Hi")) == "StrChunk('Hi')"

    def test_copy_shares_storage(self):
        chunk = StrChunk("Hello")
        clone = copy.copy(chunk)
        assert clone == chunk
        assert clone.as_bytes().obj is chunk.as_bytes().obj


class TestSlice:
    """Test zero-copy slicing by byte range."""

    def test_slice_ascii(self):
        chunk = StrChunk("Hello World")
        assert chunk.slice(6, 11) == "World"
        assert chunk.slice(6) == "World"
        assert chunk.slice() == "Hello World"

    def test_slice_shares_storage(self):
        chunk = StrChunk("Hello World")
        part = chunk.slice(0, 5)
        assert part.as_bytes().obj is chunk.as_bytes().obj

    def test_slice_of_slice(self):
        chunk = StrChunk("Привет, мир")
        word = chunk.slice(14)
        assert word == "мир"
        assert word.slice(2, 4) == "и"

    def test_slice_empty(self):
        assert StrChunk("Hello").slice(5, 5) == ""

    def test_slice_inside_character(self):
        chunk = StrChunk("Привет")
        with pytest.raises(CharBoundaryError):
            chunk.slice(1, 4)
        with pytest.raises(CharBoundaryError):
            chunk.slice(0, 3)

    def test_slice_out_of_bounds(self):
        chunk = StrChunk("Hello")
        with pytest.raises(OutOfBoundsError):
            chunk.slice(0, 6)
        with pytest.raises(OutOfBoundsError):
            chunk.slice(-1)

    def test_slice_reversed(self):
        with pytest.raises(OutOfBoundsError):
            StrChunk("Hello").slice(3, 1)

    def test_source_unchanged(self):
        chunk = StrChunk("Hello")
        chunk.slice(1, 3)
        assert chunk == "Hello"


class TestSliceRef:
    """Test recovering a chunk for a sub-reference."""

    def test_subset_of_chunk(self):
        chunk = StrChunk("Hello World")
        world = chunk.slice(6)
        again = chunk.slice_ref(world)
        assert again == "World"
        assert again.as_bytes().obj is chunk.as_bytes().obj

    def test_whole_chunk(self):
        chunk = StrChunk("Hello")
        assert chunk.slice_ref(chunk) == "Hello"

    def test_empty_subset(self):
        assert StrChunk("Hello").slice_ref(StrChunk()) == ""

    def test_foreign_storage(self):
        """A chunk with equal text but different storage is rejected."""
        chunk = StrChunk("Hello World")
        with pytest.raises(ValueError):
            chunk.slice_ref(StrChunk("World"))

    def test_equal_short_chunks_are_distinct(self):
        """Separately built chunks never count as slices of each other."""
        with pytest.raises(ValueError):
            StrChunk("a").slice_ref(StrChunk("a"))
        with pytest.raises(ValueError):
            StrChunk("Hello").slice_ref(StrChunk("Hello"))

    def test_outside_chunk(self):
        """A slice of the same storage reaching outside this chunk is rejected."""
        whole = StrChunk("Hello World")
        hello = whole.slice(0, 5)
        with pytest.raises(ValueError):
            hello.slice_ref(whole.slice(4, 8))

    def test_not_a_chunk(self):
        with pytest.raises(TypeError):
            StrChunk("Hello").slice_ref("Hello")


class TestTakeRangeSharing:
    """Test that splitting a StrChunk never affects other handles."""

    def test_other_handles_keep_content(self):
        chunk = StrChunk("Hello World")
        clone = copy.copy(chunk)
        head = chunk.take_range(slice(None, 6))
        assert head == "Hello "
        assert chunk == "World"
        assert clone == "Hello World"

    def test_frozen_chunk_shares_storage(self):
        buf = StrChunkMut("Hello")
        chunk = buf.freeze()
        tail = chunk.take_range(slice(2, None))
        assert tail.as_bytes().obj is chunk.as_bytes().obj
