"""
Boundary - UTF-8 code point boundary checks.

A byte index is a boundary when it does not fall inside the encoding of
a multi-byte character: 0 and the length are always boundaries, and an
interior index is one unless the byte there is a continuation byte
(0x80-0xBF).
"""

from .errors import CharBoundaryError, OutOfBoundsError


def is_continuation_byte(byte: int) -> bool:
    """Check if a byte is a UTF-8 continuation byte."""
    return 0x80 <= byte < 0xC0


def is_char_boundary(data, index: int) -> bool:
    """Check if `index` lies on a code point boundary of the UTF-8 bytes in `data`."""
    if index == 0 or index == len(data):
        return True
    if index < 0 or index > len(data):
        return False
    return not is_continuation_byte(data[index])


def check_char_boundary(data, index: int, split_range=None) -> None:
    """
    Raise if `index` is not a usable split point in `data`.

    OutOfBoundsError is raised for an index outside the buffer and
    CharBoundaryError for one that splits a multi-byte sequence.
    """
    if is_char_boundary(data, index):
        return
    described = split_range if split_range is not None else index
    if index < 0 or index > len(data):
        raise OutOfBoundsError(
            f"range {described} is out of bounds of the string buffer",
            split_range=split_range, index=index, length=len(data),
        )
    raise CharBoundaryError(
        f"range {described} does not split on a UTF-8 boundary",
        split_range=split_range, index=index, length=len(data),
    )
