"""Applies the symbols of a MAP file to a target database."""

import logging
from typing import Dict, Iterator, Optional, Tuple

import map_file
import map_parser
from options import Options
from outcomes import Symbol, SymbolLine
from segment_map import SegmentLookup

logger = logging.getLogger(__name__)

# (segment index, segment-relative address)
Location = Tuple[int, int]


class SymbolTarget:
    """Database that receives names and comments, keyed by location."""

    def has_name(self, segment: int, address: int) -> bool:
        raise NotImplementedError

    def set_name(self, segment: int, address: int, name: str) -> bool:
        raise NotImplementedError

    def has_comment(self, segment: int, address: int) -> bool:
        raise NotImplementedError

    def set_comment(self, segment: int, address: int, comment: str) -> bool:
        raise NotImplementedError


class MemoryTarget(SymbolTarget):
    """Keeps applied names and comments in dicts."""

    def __init__(self):
        self.names = {}  # type: Dict[Location, str]
        self.comments = {}  # type: Dict[Location, str]

    def has_name(self, segment, address):
        return (segment, address) in self.names

    def set_name(self, segment, address, name):
        self.names[(segment, address)] = name
        return True

    def has_comment(self, segment, address):
        return (segment, address) in self.comments

    def set_comment(self, segment, address, comment):
        self.comments[(segment, address)] = comment
        return True

    def listing(self) -> Iterator[str]:
        """Yields "SSSS:AAAAAAAA kind text" lines, in address order."""
        entries = [
            (loc, "name", text) for loc, text in self.names.items()
        ] + [
            (loc, "comment", text) for loc, text in self.comments.items()
        ]
        for (segment, address), kind, text in sorted(entries):
            yield "%04X:%08X %-7s %s" % (segment, address, kind, text)


class ImportResult:
    def __init__(
            self, filename: str, sections: int, applied: int, invalid: int):
        self.filename = filename  # type: str

        # Number of symbol table sections recognized
        self.sections = sections  # type: int

        # Names and comments written to the target
        self.applied = applied  # type: int

        # Invalid lines, plus writes the target refused
        self.invalid = invalid  # type: int

    @property
    def recognized(self) -> bool:
        """Whether the file had any symbol table we know how to read."""
        return self.sections > 0

    def summary(self) -> str:
        return (
            "Result of loading and parsing the Map file '%s'\n"
            "   Number of Symbols applied: %d\n"
            "   Number of Invalid Symbols: %d" % (
                self.filename, self.applied, self.invalid))


def apply_symbol(
        target: SymbolTarget, symbol: Symbol, apply_to_name: bool,
        replace: bool) -> int:
    """Writes symbol to target as a name or a comment.

    :return: 1 if written, 0 if something was already there and replace
      is not set, -1 if the target refused the write
    """
    seg, addr = symbol.segment, symbol.address
    if apply_to_name:
        if not replace and target.has_name(seg, addr):
            return 0
        if target.set_name(seg, addr, symbol.name):
            logger.debug(
                "%04X:%08X - Change name to '%s' succeeded",
                seg, addr, symbol.name)
            return 1
        logger.debug(
            "%04X:%08X - Change name to '%s' failed", seg, addr, symbol.name)
        return -1

    if not replace and target.has_comment(seg, addr):
        return 0
    if target.set_comment(seg, addr, symbol.name):
        logger.debug(
            "%04X:%08X - Change comment to '%s' succeeded",
            seg, addr, symbol.name)
        return 1
    logger.debug(
        "%04X:%08X - Change comment to '%s' failed", seg, addr, symbol.name)
    return -1


def import_symbols(
        filename: str, target: SymbolTarget, max_segments: int,
        segment_lookup: Optional[SegmentLookup] = None,
        options: Optional[Options] = None) -> ImportResult:
    """Parses a MAP file and applies its symbols to target.

    :raises map_file.MapFileError: if the file can't be loaded
    """
    options = options or Options()
    parser = map_parser.MapParser(max_segments, segment_lookup, options)

    applied = 0
    refused = 0
    with map_file.open_map(filename) as buf:
        try:
            for parsed in parser.parse(buf):
                if not isinstance(parsed.outcome, SymbolLine):
                    continue
                res = apply_symbol(
                    target, parsed.outcome.symbol, parsed.apply_to_name,
                    options.replace)
                if res == 1:
                    applied += 1
                elif res == -1:
                    refused += 1
        except Exception:
            # Target faults stop the import like parse faults do
            logger.exception("Exception while applying symbols")
            refused += 1

    session = parser.session
    return ImportResult(
        filename, session.sections, applied, session.invalid_lines + refused)
