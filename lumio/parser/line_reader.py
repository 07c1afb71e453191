"""
Sequential line access shared by the IES and EULUMDAT parsers.

Both formats are line oriented ASCII. The reader hands out one line at a time,
tracks the 1-indexed line number for error messages, applies the active line
length budget and converts single-value lines to numbers. Decimal commas and
stray spaces/underscores are tolerated because real-world EULUMDAT files are
frequently written by European locale tools.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from lumio.parser.errors import (
    LineLengthError,
    MalformedValueError,
    NoValueError,
    UnexpectedEndOfInput,
)
from lumio.parser.keywords import encoded_length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseNote:
    message: str
    line_no: Optional[int] = None


def _clean_number(text: str) -> str:
    return text.strip().replace(" ", "").replace("_", "")


def parse_int(text: str, line_no: Optional[int] = None, field: str = "value") -> int:
    clean = _clean_number(text)
    if not clean:
        raise NoValueError(f"Line contains no integer for {field}", line_no=line_no, snippet=text)
    try:
        return int(clean)
    except ValueError:
        raise MalformedValueError(f"Invalid integer for {field}: '{text.strip()}'", line_no=line_no, snippet=text)


def parse_float(text: str, line_no: Optional[int] = None, field: str = "value") -> float:
    clean = _clean_number(text).replace(",", ".")
    if not clean:
        raise NoValueError(f"Line contains no float for {field}", line_no=line_no, snippet=text)
    try:
        return float(clean)
    except ValueError:
        raise MalformedValueError(f"Invalid float for {field}: '{text.strip()}'", line_no=line_no, snippet=text)


class LineReader:
    """Wraps a text source (file object or any iterable of lines)."""

    def __init__(self, source: Iterable[str], strict: bool = False, encoding: str = "utf-8"):
        self._lines: Iterator[str] = iter(source)
        self.strict = strict
        # budgets are checked against the line as encoded on disk
        self.encoding = encoding
        self.line_no = 0
        self.current: Optional[str] = None
        self.notes: List[ParseNote] = []

    def next_line(self, max_length: Optional[int] = None) -> str:
        """Advance and return the next raw line without its terminator."""
        raw = next(self._lines, None)
        if raw is None:
            self.current = None
            raise UnexpectedEndOfInput("Unexpected end of input", line_no=self.line_no + 1)
        self.line_no += 1
        line = raw.rstrip("\r\n")
        if max_length is not None:
            self.check_length(line, max_length)
        self.current = line
        return line

    def check_length(self, line: str, max_length: int) -> None:
        size = encoded_length(line, self.encoding)
        if size <= max_length:
            return
        message = f"Line exceeds maximum allowed length: {size} > {max_length} bytes"
        if self.strict:
            raise LineLengthError(message, line_no=self.line_no, snippet=line)
        logger.warning("line %d: %s", self.line_no, message)
        self.notes.append(ParseNote(message, self.line_no))

    def read_string(self, max_length: int) -> str:
        line = self.next_line().strip()
        self.check_length(line, max_length)
        return line

    def read_int(self, field: str = "value") -> int:
        return parse_int(self.next_line(), self.line_no, field)

    def read_float(self, field: str = "value") -> float:
        return parse_float(self.next_line(), self.line_no, field)
