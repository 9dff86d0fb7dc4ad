"""Enum representing the MAP file layout of a symbol table section."""

import enum


class Dialect(enum.Enum):
    NONE = 0  # Outside of any symbol table
    MSVC = 1  # Visual C++ "Publics by Value"
    BORLAND_BY_NAME = 2  # Borland "Publics by Name"
    BORLAND_BY_VALUE = 3  # Borland "Publics by Value"
    WATCOM = 4  # Watcom "Memory Map"
    GNU_LD = 5  # GNU ld "Linker script and memory map"
