"""Maps linear addresses onto the segments of the destination address space.

GNU ld MAP files list absolute addresses, while every other dialect names a
segment directly.  The parser only needs a lookup function from a linear
address to (segment index, segment base), so the destination address space
stays pluggable; SegmentMap is the stand-alone implementation of it.
"""

from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

# Given a linear address, returns (segment index, segment base address) of
# the segment containing it, or None.
SegmentLookup = Callable[[int], Optional[Tuple[int, int]]]


class Segment:
    def __init__(self, name: str, start: int, end: int):
        if end < start:
            raise ValueError(
                "Segment %s ends before it starts: %x < %x" % (
                    name, end, start))
        self.name = name  # type: str
        self.start = start  # type: int
        # Exclusive
        self.end = end  # type: int

    def __repr__(self):
        return "Segment(%s, %x, %x)" % (self.name, self.start, self.end)

    def __contains__(self, addr: int) -> bool:
        return self.start <= addr < self.end


class SegmentMap:
    """Ordered segments of an address space.

    Segment indices are positions in the order given, which need not be
    sorted by address.
    """

    def __init__(self, segments: Iterable[Segment] = ()):
        self.segments = list(segments)  # type: List[Segment]

        starts = np.array(
            [s.start for s in self.segments], dtype=np.uint64)
        # Index into self.segments of each entry of self._starts
        self._order = np.argsort(starts, kind="stable")
        self._starts = starts[self._order]

    def __len__(self):
        return len(self.segments)

    def lookup(self, linear: int) -> Optional[Tuple[int, int]]:
        """Finds the segment containing linear address.

        :param linear: absolute address
        :return: (segment index, segment start), or None if no segment
          contains the address
        """
        if not self.segments:
            return None

        # Last segment starting at or below the address
        pos = int(np.searchsorted(
            self._starts, np.uint64(linear), side="right")) - 1
        if pos < 0:
            return None

        index = int(self._order[pos])
        segment = self.segments[index]
        if linear not in segment:
            return None
        return index, segment.start


def resolve_linear(
        linear: int,
        segment_lookup: Optional[SegmentLookup]) -> Optional[Tuple[int, int]]:
    """Converts a linear address to (segment index, segment-relative address).

    Returns None when there is no lookup, or no segment contains the address.
    """
    if segment_lookup is None:
        return None

    found = segment_lookup(linear)
    if found is None:
        return None

    index, base = found
    return index, linear - base


def parse_segment(spec: str) -> Segment:
    """Parses a "[NAME=]START-END" segment description, with hex addresses.

    e.g. ".text=401000-402000"
    """
    name, _, bounds = spec.rpartition("=")
    start, dash, end = bounds.partition("-")
    if not dash:
        raise ValueError("Expected START-END, got %r" % bounds)
    return Segment(name, int(start, 16), int(end, 16))
