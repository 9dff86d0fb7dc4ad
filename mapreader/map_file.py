"""Opens MAP files as read-only buffers."""

import contextlib
import mmap
import os
from typing import Iterator


class MapFileError(Exception):
    def __init__(self, filename: str):
        self.filename = filename


class MapOpenError(MapFileError):
    def __init__(self, filename: str, error: Exception):
        super(MapOpenError, self).__init__(filename)
        self.error = error

    def __str__(self):
        return "Could not open file '%s': %s" % (self.filename, self.error)


class EmptyMapFileError(MapFileError):
    def __str__(self):
        return "File '%s' is empty, zero size" % self.filename


class BinaryMapFileError(MapFileError):
    def __str__(self):
        return "File '%s' seem to be a binary or Unicode file" % self.filename


@contextlib.contextmanager
def open_map(filename: str) -> Iterator[mmap.mmap]:
    """Maps the contents of a MAP file into memory, read-only.

    The mapping is closed when the context exits, however it exits.

    :raises MapFileError: if the file can't be read, is empty or is not
      plain 8-bit text
    """
    try:
        with open(filename, "rb") as f:
            if os.fstat(f.fileno()).st_size == 0:
                raise EmptyMapFileError(filename)
            buf = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)
    except (OSError, ValueError) as e:
        raise MapOpenError(filename, e) from e

    try:
        if buf.find(b"\0") != -1:
            raise BinaryMapFileError(filename)
        yield buf
    finally:
        buf.close()


def switch_extension(path: str, extension: str) -> str:
    """Replaces the extension of path, e.g. "foo.exe" -> "foo.map"."""
    root, _ = os.path.splitext(path)
    return root + extension
