"""
strchunk - UTF-8 validated, zero-copy string buffers for streaming input.
"""

import logging

from .boundary import is_char_boundary
from .bytebuf import ByteBuffer
from .chunk import StrChunk
from .chunk_mut import StrChunkMut
from .errors import (
    CapacityError,
    CharBoundaryError,
    ExtractUtf8Error,
    FrozenBufferError,
    OutOfBoundsError,
    SplitRangeError,
    TruncatedUtf8Error,
)
from .extract import extract_utf8
from .reader import AsyncUtf8Reader, Utf8Reader
from .split import RangeKind, SplitRange

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'AsyncUtf8Reader',
    'ByteBuffer',
    'CapacityError',
    'CharBoundaryError',
    'ExtractUtf8Error',
    'FrozenBufferError',
    'OutOfBoundsError',
    'RangeKind',
    'SplitRange',
    'SplitRangeError',
    'StrChunk',
    'StrChunkMut',
    'TruncatedUtf8Error',
    'Utf8Reader',
    'extract_utf8',
    'is_char_boundary',
]
__version__ = '0.1.0'
