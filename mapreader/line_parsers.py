"""Decodes the lines of a symbol table section into LineOutcomes.

All dialects share the same rules:

- a line starting with ";" is a comment
- the first line that does not tokenize as table data ends the table.  The
  tables have no reliable footer, so there is no way to tell trailer text
  from a corrupt symbol line; both end the section.
- a line that tokenizes, but names segment 0 (for 1-based segment numbers),
  a segment beyond max_segments, or the "no address" sentinel, is invalid.

The dialects differ in how a line tokenizes:

MSVC and Borland:   " SSSS:AAAAAAAA       name"
Watcom:             " SSSS:AAAAAAAA+ name"  (one flag column after address)
GNU ld:             " 0xAAAAAAAAAAAAAAAA  name"  (linear address)

where address fields are 16 hex digits wide for 64-bit address spaces.
Names end at whitespace or ";".
"""

from typing import Callable, Dict, Optional

import field_scanner
import segment_map
from dialect import Dialect
from line_scanner import MIN_LINE_LEN
from outcomes import (
    MAX_NAME_LEN, Comment, Invalid, LineOutcome, SectionFinished, Skip,
    Symbol, SymbolLine)

# Lines are cut to this length before tokenizing
MAX_LINE_LEN = MAX_NAME_LEN + MIN_LINE_LEN

COMMENT_MARKER = ";"
NAME_STOP = field_scanner.WHITESPACE + ";\0"

WATCOM_SKIP = "=======        ======"
WATCOM_MODULE = "Module: "

# Discarded input sections and wildcard patterns
GNU_LD_SKIP = (".", " .", "*", " *")
GNU_LD_LOAD = "LOAD "


def address_digits(ea64: bool) -> int:
    return 16 if ea64 else 8


def bad_address(ea64: bool) -> int:
    """The all-ones "no address" sentinel for the address width."""
    return (1 << (4 * address_digits(ea64))) - 1


def _startswith_nocase(text: str, prefix: str) -> bool:
    return text[:len(prefix)].lower() == prefix.lower()


def _comment(text: str) -> Comment:
    return Comment(text[:MAX_NAME_LEN])


def _symbol(
        segment: int, address: int, name: str, max_segments: int,
        ea64: bool) -> LineOutcome:
    """Validates a decoded 0-based segment, address and name."""
    if segment >= max_segments or address == bad_address(ea64) or not name:
        return Invalid()
    return SymbolLine(Symbol(segment, address, name[:MAX_NAME_LEN]))


def _segmented_symbol(
        scanner: field_scanner.FieldScanner, max_segments: int, ea64: bool,
        flag_column: bool) -> LineOutcome:
    segment = scanner.hex_field(4)
    if segment is None or not scanner.literal(":"):
        return SectionFinished()

    address = scanner.hex_field(address_digits(ea64))
    if address is None:
        return SectionFinished()
    if flag_column and not scanner.any_char():
        return SectionFinished()

    name = scanner.token(NAME_STOP)
    if name is None:
        return SectionFinished()

    # Segments are numbered from 1 in the file
    if segment == 0:
        return Invalid()
    return _symbol(segment - 1, address, name, max_segments, ea64)


def parse_ms_line(
        text: str, max_segments: int, ea64: bool = True,
        segment_lookup: Optional[segment_map.SegmentLookup] = None
) -> LineOutcome:
    """Parses a line of a MSVC or Borland publics table."""
    text = text[:MAX_LINE_LEN]
    if text.startswith(COMMENT_MARKER):
        return _comment(text[1:])

    return _segmented_symbol(
        field_scanner.FieldScanner(text), max_segments, ea64,
        flag_column=False)


def parse_watcom_line(
        text: str, max_segments: int, ea64: bool = True,
        segment_lookup: Optional[segment_map.SegmentLookup] = None
) -> LineOutcome:
    """Parses a line of a Watcom memory map.

    Symbols are grouped by "Module: " banners, which become comments.
    """
    text = text[:MAX_LINE_LEN]
    if text.startswith(COMMENT_MARKER):
        return _comment(text[1:])
    if _startswith_nocase(text, WATCOM_SKIP):
        return Skip()
    if _startswith_nocase(text, WATCOM_MODULE):
        return _comment(text[len(WATCOM_MODULE):])

    return _segmented_symbol(
        field_scanner.FieldScanner(text), max_segments, ea64,
        flag_column=True)


def parse_gnu_line(
        text: str, max_segments: int, ea64: bool = True,
        segment_lookup: Optional[segment_map.SegmentLookup] = None
) -> LineOutcome:
    """Parses a line of a GNU ld linker script and memory map.

    Addresses are linear, and need segment_lookup to be placed in a segment;
    lines that can't be placed are invalid.
    """
    text = text[:MAX_LINE_LEN]
    if text.startswith(COMMENT_MARKER):
        return _comment(text[1:])
    if text.startswith(GNU_LD_SKIP):
        return Skip()
    if _startswith_nocase(text, GNU_LD_LOAD):
        # Names an input object file
        return _comment(text)

    scanner = field_scanner.FieldScanner(text)
    if not scanner.literal("0x"):
        return SectionFinished()
    linear = scanner.hex_field(address_digits(ea64))
    if linear is None or not scanner.any_char():
        return SectionFinished()
    name = scanner.token(NAME_STOP)
    if name is None:
        return SectionFinished()

    resolved = segment_map.resolve_linear(linear, segment_lookup)
    if resolved is None:
        return Invalid()
    segment, address = resolved
    return _symbol(segment, address, name, max_segments, ea64)


LineParser = Callable[..., LineOutcome]

LINE_PARSERS = {
    Dialect.MSVC: parse_ms_line,
    Dialect.BORLAND_BY_NAME: parse_ms_line,
    Dialect.BORLAND_BY_VALUE: parse_ms_line,
    Dialect.WATCOM: parse_watcom_line,
    Dialect.GNU_LD: parse_gnu_line,
}  # type: Dict[Dialect, LineParser]


def parse_line(
        dialect: Dialect, text: str, max_segments: int, ea64: bool = True,
        segment_lookup: Optional[segment_map.SegmentLookup] = None
) -> LineOutcome:
    """Parses a line of an open section of the given dialect.

    Lines outside of any section are skipped.
    """
    if dialect == Dialect.NONE:
        return Skip()
    return LINE_PARSERS[dialect](
        text, max_segments, ea64=ea64, segment_lookup=segment_lookup)
