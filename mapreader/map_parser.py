"""Drives section detection and line parsing over a whole MAP file buffer."""

import logging
from typing import Iterator, Optional, Tuple

import dede_names
import line_parsers
import line_scanner
import section_detector
from dialect import Dialect
from options import Options
from outcomes import (
    Comment, Invalid, LineOutcome, SectionEnd, SectionFinished, SectionStart,
    Skip, Symbol, SymbolLine)
from segment_map import SegmentLookup

logger = logging.getLogger(__name__)


class ParseSession:
    """State and counters of a single pass over a MAP file."""

    def __init__(self):
        # Dialect of the currently open section
        self.dialect = Dialect.NONE  # type: Dialect

        self.sections = 0  # type: int
        self.valid_symbols = 0  # type: int
        self.invalid_lines = 0  # type: int
        self.comments = 0  # type: int

        # Last symbol decoded from a table line
        self.previous = None  # type: Optional[Symbol]

    def counters(self) -> Tuple[int, int, int, int]:
        return (
            self.sections, self.valid_symbols, self.invalid_lines,
            self.comments)


class ParsedLine:
    """A line of the buffer together with what it turned out to be."""

    def __init__(
            self, line: line_scanner.RawLine, dialect: Dialect,
            outcome: LineOutcome, apply_to_name: Optional[bool] = None):
        self.line = line

        # Section the line was read in (or opened/closed)
        self.dialect = dialect  # type: Dialect
        self.outcome = outcome  # type: LineOutcome

        # For symbols, whether to apply as a name rather than a comment
        self.apply_to_name = apply_to_name  # type: Optional[bool]

    def __repr__(self):
        return "ParsedLine(%s, %r)" % (self.dialect.name, self.outcome)


class MapParser:
    def __init__(
            self, max_segments: int,
            segment_lookup: Optional[SegmentLookup] = None,
            options: Optional[Options] = None):
        # Number of segments in the destination; bounds decoded segment ids
        self.max_segments = max_segments  # type: int

        # Places GNU ld linear addresses into segments
        self.segment_lookup = segment_lookup

        self.options = options or Options()  # type: Options

        # Session of the most recent parse() call
        self.session = ParseSession()  # type: ParseSession

    def parse(self, buffer: line_scanner.Buffer) -> Iterator[ParsedLine]:
        """Yields a ParsedLine for every non-blank line of buffer.

        Any unexpected error stops the parse and is counted as one invalid
        line.
        """
        session = self.session = ParseSession()
        try:
            for line in line_scanner.iter_lines(buffer):
                yield self._parse_line(session, line)
        except Exception:
            logger.exception("Exception while parsing MAP file")
            session.invalid_lines += 1

    def _parse_line(
            self, session: ParseSession,
            line: line_scanner.RawLine) -> ParsedLine:
        if len(line) < line_scanner.MIN_LINE_LEN:
            return ParsedLine(line, session.dialect, Skip())

        text = line.text

        # Check if we're on a section header or section end
        if session.dialect == Dialect.NONE:
            dialect = section_detector.detect_section_start(text)
            if dialect != Dialect.NONE:
                session.dialect = dialect
                session.sections += 1
                logger.debug("Section start line: '%s'.", text)
                return ParsedLine(line, dialect, SectionStart(dialect))
        else:
            dialect = session.dialect
            session.dialect = section_detector.detect_section_end(
                dialect, text)
            if session.dialect == Dialect.NONE:
                logger.debug("Section end line: '%s'.", text)
                return ParsedLine(line, dialect, SectionEnd(dialect))

        dialect = session.dialect
        outcome = line_parsers.parse_line(
            dialect, text, self.max_segments, ea64=self.options.ea64,
            segment_lookup=self.segment_lookup)
        return self._account(session, line, text, dialect, outcome)

    def _account(
            self, session: ParseSession, line: line_scanner.RawLine,
            text: str, dialect: Dialect,
            outcome: LineOutcome) -> ParsedLine:
        """Updates session for outcome, and applies the naming policy."""

        if isinstance(outcome, Skip):
            logger.debug("Skipping line: '%s'.", text)
        elif isinstance(outcome, SectionFinished):
            session.dialect = Dialect.NONE
            logger.debug("Parsing finished at line: '%s'.", text)
        elif isinstance(outcome, Invalid):
            session.invalid_lines += 1
            logger.debug(
                "Invalid map line: %s (after %r).", text, session.previous)
        elif isinstance(outcome, Comment):
            session.comments += 1
            logger.debug("Comment line: %s.", text)
        elif isinstance(outcome, SymbolLine):
            symbol = outcome.symbol
            session.previous = symbol

            name, apply_to_name = dede_names.classify(
                symbol.name, self.options.name_apply)
            if not name:
                # Nothing left after the DeDe prefix
                session.invalid_lines += 1
                logger.debug("Invalid map line: %s.", text)
                return ParsedLine(line, dialect, Invalid())

            session.valid_symbols += 1
            outcome = SymbolLine(Symbol(symbol.segment, symbol.address, name))
            return ParsedLine(line, dialect, outcome, apply_to_name)

        return ParsedLine(line, dialect, outcome)
