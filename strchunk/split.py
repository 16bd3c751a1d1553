"""
Split - Range shapes and boundary-checked take/remove operations.

Both buffer types split along one of three range shapes: the whole
buffer, everything from an index, or everything up to an index. Every
endpoint is checked against the UTF-8 boundaries of the content before
the buffer is touched, so a rejected range leaves the buffer unchanged.
"""

import enum
from dataclasses import dataclass

from .boundary import check_char_boundary


class RangeKind(enum.Enum):
    FULL = "full"
    FROM = "from"
    TO = "to"


@dataclass(frozen=True)
class SplitRange:
    """
    A range accepted by `take_range` and `remove_range`.

    `index` is the byte offset of the single bounded end; it is ignored
    for FULL ranges. Inclusive upper bounds are stored as the exclusive
    bound one past them, with `inclusive` kept for display.
    """

    kind: RangeKind
    index: int = 0
    inclusive: bool = False

    @classmethod
    def full(cls) -> "SplitRange":
        return cls(RangeKind.FULL)

    @classmethod
    def from_index(cls, start: int) -> "SplitRange":
        return cls(RangeKind.FROM, start)

    @classmethod
    def to_index(cls, end: int) -> "SplitRange":
        return cls(RangeKind.TO, end)

    @classmethod
    def to_inclusive(cls, end: int) -> "SplitRange":
        return cls(RangeKind.TO, end + 1, inclusive=True)

    @classmethod
    def coerce(cls, value) -> "SplitRange":
        """
        Convert a SplitRange or a `slice` object into a SplitRange.

        Only the slice shapes `[:]`, `[i:]` and `[:j]` are accepted. A
        slice bounded on both ends is accepted when it starts at 0, since
        `[0:j]` covers the same bytes as `[:j]`.
        """
        if isinstance(value, SplitRange):
            return value
        if not isinstance(value, slice):
            raise TypeError(f"expected a SplitRange or slice, got {type(value).__name__}")
        if value.step is not None:
            raise ValueError("ranges with a step cannot split a buffer")
        if value.start is None and value.stop is None:
            return cls.full()
        if value.stop is None:
            return cls.from_index(value.start)
        if value.start is None or value.start == 0:
            return cls.to_index(value.stop)
        raise ValueError(
            f"range [{value.start}:{value.stop}] has two bounds; "
            "only [:], [i:] and [:j] can split a buffer"
        )

    def validate(self, data) -> None:
        """Raise unless the bounded end of this range is a boundary in `data`."""
        if self.kind is not RangeKind.FULL:
            check_char_boundary(data, self.index, self)

    def __str__(self) -> str:
        if self.kind is RangeKind.FULL:
            return "[:]"
        if self.kind is RangeKind.FROM:
            return f"[{self.index}:]"
        if self.inclusive:
            return f"[:={self.index - 1}]"
        return f"[:{self.index}]"


class TakeRange:
    """
    Mixin giving a buffer `take_range` and `remove_range`.

    Subclasses supply `as_bytes()` for validation and the unchecked
    `_split_to(at)` / `_split_off(at)` primitives, which must behave like
    their ByteBuffer counterparts and return the same buffer type.
    """

    __slots__ = ()

    def take_range(self, range_):
        """
        Remove the bytes covered by `range_` and return them as a new buffer.

        `[:]` takes everything and leaves this buffer empty, `[i:]` takes
        the tail from `i`, and `[:j]` takes the head up to `j`.
        """
        split_range = SplitRange.coerce(range_)
        split_range.validate(self.as_bytes())
        if split_range.kind is RangeKind.FULL:
            return self._split_to(len(self))
        if split_range.kind is RangeKind.FROM:
            return self._split_off(split_range.index)
        return self._split_to(split_range.index)

    def remove_range(self, range_) -> None:
        """Discard the bytes covered by `range_`."""
        self.take_range(range_)
