"""
Text - Value semantics shared by the UTF-8 buffer types.

Equality, ordering and hashing are all defined on the decoded text, so a
buffer compares equal to any other buffer or `str` with the same content
regardless of where its bytes are stored.
"""

import operator
from typing import Callable, Optional


def _text_of(value) -> Optional[str]:
    """Return the text to compare against, or None for unsupported types."""
    if isinstance(value, str):
        return value
    if isinstance(value, TextValue):
        return value.as_str()
    return None


class TextValue:
    """Mixin for types exposing their UTF-8 content through `as_str()`."""

    __slots__ = ()

    def as_str(self) -> str:
        raise NotImplementedError

    def _compare(self, other, op: Callable[[str, str], bool]):
        text = _text_of(other)
        if text is None:
            return NotImplemented
        return op(self.as_str(), text)

    def __eq__(self, other):
        return self._compare(other, operator.eq)

    def __ne__(self, other):
        return self._compare(other, operator.ne)

    def __lt__(self, other):
        return self._compare(other, operator.lt)

    def __le__(self, other):
        return self._compare(other, operator.le)

    def __gt__(self, other):
        return self._compare(other, operator.gt)

    def __ge__(self, other):
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        return hash(self.as_str())

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_str()!r})"
