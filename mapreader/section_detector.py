"""Recognizes the header and terminator lines of symbol table sections.

A section opens on a line that matches one of the known header lines,
ignoring case and trailing whitespace.  It closes either on one of the
terminator prefixes of its dialect, or when a line no longer decodes as
table data (see line_parsers).
"""

from typing import Dict, Tuple

from dialect import Dialect

MSVC_HEADERS = (
    "Address         Publics by Value              Rva+Base     Lib:Object",
    # Newer linkers print two more spaces before Lib:Object
    "Address         Publics by Value              Rva+Base       Lib:Object",
)
BORLAND_BY_NAME_HEADER = "Address         Publics by Name"
BORLAND_BY_VALUE_HEADER = "Address         Publics by Value"
WATCOM_HEADER = "Address        Symbol"
GNU_LD_HEADER = "Linker script and memory map"

# Ordered list of (header line, dialect it opens)
SECTION_HEADERS = tuple(
    [(header, Dialect.MSVC) for header in MSVC_HEADERS] + [
        (BORLAND_BY_NAME_HEADER, Dialect.BORLAND_BY_NAME),
        (BORLAND_BY_VALUE_HEADER, Dialect.BORLAND_BY_VALUE),
        (WATCOM_HEADER, Dialect.WATCOM),
        (GNU_LD_HEADER, Dialect.GNU_LD),
    ]
)  # type: Tuple[Tuple[str, Dialect], ...]

# Case-sensitive line prefixes that close an open section.  Borland tables
# only end at the first line that is not a symbol.
SECTION_TERMINATORS = {
    Dialect.MSVC: ("Line numbers for ", "FIXUPS: ", "Exports"),
    Dialect.BORLAND_BY_NAME: (),
    Dialect.BORLAND_BY_VALUE: (),
    Dialect.WATCOM: ("+----------------------+",),
    Dialect.GNU_LD: ("OUTPUT(",),
}  # type: Dict[Dialect, Tuple[str, ...]]

_HEADER_LOOKUP = {
    header.lower(): dialect for header, dialect in SECTION_HEADERS
}  # type: Dict[str, Dialect]


def detect_section_start(text: str) -> Dialect:
    """Returns dialect whose header line this is, or Dialect.NONE."""
    return _HEADER_LOOKUP.get(text.rstrip().lower(), Dialect.NONE)


def detect_section_end(dialect: Dialect, text: str) -> Dialect:
    """Returns Dialect.NONE if text terminates the open section.

    Otherwise returns dialect unchanged.
    """
    if dialect == Dialect.NONE:
        return dialect

    if text.startswith(SECTION_TERMINATORS[dialect]):
        return Dialect.NONE
    return dialect
