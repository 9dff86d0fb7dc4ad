"""Results of decoding one line of a MAP file."""

from dialect import Dialect

# Longest symbol name we hand out, in bytes (latin-1 characters)
MAX_NAME_LEN = 512


class Symbol:
    """A named address, as (segment index, offset within segment)."""

    def __init__(self, segment: int, address: int, name: str):
        if not name:
            raise ValueError("Empty symbol name")
        if "\0" in name:
            raise ValueError("Symbol name contains NUL: %r" % name)
        if len(name) > MAX_NAME_LEN:
            raise ValueError(
                "Symbol name too long: %d > %d" % (len(name), MAX_NAME_LEN))

        self.segment = segment  # type: int
        self.address = address  # type: int
        self.name = name  # type: str

    def __repr__(self):
        return "Symbol(%04X:%08X %s)" % (self.segment, self.address, self.name)

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return False
        return (self.segment, self.address, self.name) == (
            other.segment, other.address, other.name)


class LineOutcome:
    """Base class for line outcomes."""

    def __repr__(self):
        return "%s()" % self.__class__.__name__

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False

        return self.__data_eq__(other)

    def __data_eq__(self, other):
        raise NotImplementedError


class Skip(LineOutcome):
    """Line carries nothing of interest."""

    def __data_eq__(self, other):
        return True


class Invalid(LineOutcome):
    """Line decoded as a symbol but failed a validity check."""

    def __data_eq__(self, other):
        return True


class SectionFinished(LineOutcome):
    """Line no longer decodes as table data, so the table has ended."""

    def __data_eq__(self, other):
        return True


class Comment(LineOutcome):
    def __init__(self, text: str):
        self.text = text

    def __repr__(self):
        return "Comment(%r)" % self.text

    def __data_eq__(self, other):
        return self.text == other.text


class SymbolLine(LineOutcome):
    def __init__(self, symbol: Symbol):
        self.symbol = symbol

    def __repr__(self):
        return "SymbolLine(%r)" % self.symbol

    def __data_eq__(self, other):
        return self.symbol == other.symbol


class SectionStart(LineOutcome):
    """Header line that opened a symbol table."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def __repr__(self):
        return "SectionStart(%s)" % self.dialect.name

    def __data_eq__(self, other):
        return self.dialect == other.dialect


class SectionEnd(LineOutcome):
    """Terminator line that closed a symbol table."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def __repr__(self):
        return "SectionEnd(%s)" % self.dialect.name

    def __data_eq__(self, other):
        return self.dialect == other.dialect
