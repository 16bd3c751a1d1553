import sys
sys.path.insert(0, '..')

import io
import time

from strchunk import StrChunkMut, Utf8Reader

message = (
    "Hello, world!\n"
    "Здравствуй, мир!\n"
    "こんにちは世界\n"
    "Emoji work too: 😀 🎉\n"
)


class TrickleStream:
    """Hand out a few bytes per read, the way a slow socket would."""

    def __init__(self, data: bytes, piece_size: int = 5):
        self.data = data
        self.piece_size = piece_size
        self.pos = 0

    def read(self, size):
        size = min(size, self.piece_size)
        piece = self.data[self.pos:self.pos + size]
        self.pos += len(piece)
        return piece


if len(sys.argv) > 1:
    with open(sys.argv[1], 'rb') as f:
        data = f.read()
else:
    data = message.encode('utf-8')

reader = Utf8Reader(TrickleStream(data), capacity=16)
collected = StrChunkMut()

for chunk in reader:
    print(f"{len(chunk):2d} bytes: {chunk.as_str()!r}")
    collected.push_str(chunk.as_str())
    time.sleep(0.01)

text = collected.freeze()
assert bytes(text) == data

print()
print(text)

# A broken sequence in the middle is replaced instead of raising.
broken = io.BytesIO(b"valid \xf0\x90\x80 then more")
print(''.join(str(chunk) for chunk in Utf8Reader(broken, errors='replace')))
