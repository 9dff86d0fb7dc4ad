"""Splits a MAP file buffer into non-blank lines without copying it."""

import mmap
from typing import Iterator, Union

# Buffers we scan: anything indexable to ints and searchable with find()
Buffer = Union[bytes, bytearray, mmap.mmap]

# Shortest line that can hold a "xxxx:xxxxxxxx " symbol prefix.  Anything
# shorter is skipped before section or symbol recognition happens.
MIN_LINE_LEN = 14

_WHITESPACE = b" \t\n\v\f\r"


def skip_blank(buffer: Buffer, pos: int) -> int:
    """Returns offset of first non-whitespace byte at or after pos.

    Line terminators count as whitespace, so this also skips blank lines.
    Returns len(buffer) if only whitespace remains.
    """
    end = len(buffer)
    while pos < end and buffer[pos] in _WHITESPACE:
        pos += 1
    return pos


def find_line_end(buffer: Buffer, start: int) -> int:
    """Returns offset of first CR or LF at or after start, or len(buffer)."""
    end = buffer.find(b"\n", start)
    if end == -1:
        end = len(buffer)
    # A CR can only end the line if it comes before the LF
    cr = buffer.find(b"\r", start, end)
    if cr != -1:
        end = cr
    return end


class RawLine:
    """A view of one line of the buffer, as [start, end) offsets."""

    def __init__(self, buffer: Buffer, start: int, end: int):
        if not 0 <= start <= end <= len(buffer):
            raise ValueError(
                "Invalid line bounds [%d, %d) for buffer of %d bytes" % (
                    start, end, len(buffer)))
        self.buffer = buffer
        self.start = start  # type: int
        self.end = end  # type: int

    def __len__(self):
        return self.end - self.start

    def __repr__(self):
        return "RawLine(%d, %d)" % (self.start, self.end)

    @property
    def text(self) -> str:
        # latin-1 maps each byte to exactly one character
        return bytes(self.buffer[self.start:self.end]).decode("latin-1")


def iter_lines(buffer: Buffer) -> Iterator[RawLine]:
    """Yields every non-blank line, with leading whitespace removed."""
    pos = 0
    end = len(buffer)
    while pos < end:
        start = skip_blank(buffer, pos)
        if start >= end:
            break
        pos = find_line_end(buffer, start)
        yield RawLine(buffer, start, pos)
