"""
Extract - Incremental UTF-8 extraction from a raw byte buffer.

Bytes read from a socket, file or pipe arrive in arbitrary pieces, so a
multi-byte character can be split across two reads. `extract_utf8`
removes the longest valid UTF-8 prefix from the raw buffer as a
StrChunk and leaves an incomplete trailing sequence in place until the
rest of it arrives.
"""

import codecs
import logging

from .bytebuf import ByteBuffer
from .chunk import StrChunk
from .errors import ExtractUtf8Error

logger = logging.getLogger(__name__)


def extract_utf8(raw: ByteBuffer) -> StrChunk:
    """
    Remove the longest valid UTF-8 prefix from `raw` and return it.

    The prefix is handed over without copying. Three outcomes:

    - All of `raw` is valid: it is returned whole and `raw` is left empty.
    - `raw` ends in the beginning of a multi-byte sequence: the content
      before it is returned (possibly empty) and the incomplete bytes
      stay in `raw`.
    - `raw` contains an invalid sequence: ExtractUtf8Error is raised. The
      content before the sequence has been removed from `raw` and is
      available as `error.chunk`; the invalid bytes remain at the front
      of `raw`, and skipping `error.error_len` of them resumes decoding.
    """
    with raw.memoryview() as view:
        size = len(view)
        try:
            text, consumed = codecs.utf_8_decode(view, 'strict', False)
        except UnicodeDecodeError as exc:
            error = exc
        else:
            error = None

    if error is not None:
        valid_up_to = error.start
        error_len = error.end - error.start
        logger.debug("Invalid UTF-8 sequence of %d byte(s) at offset %d: %s",
                     error_len, valid_up_to, error.reason)
        chunk = StrChunk._from_buffer(raw.split_to(valid_up_to))
        raise ExtractUtf8Error(chunk, error.object, valid_up_to, error_len,
                               error.reason) from None

    if consumed == size:
        logger.debug("Extracted all %d byte(s) as complete UTF-8", size)
        return StrChunk._from_buffer(raw.take(), text)

    logger.debug("Deferring %d byte(s) of an incomplete UTF-8 sequence",
                 size - consumed)
    return StrChunk._from_buffer(raw.split_to(consumed), text)
