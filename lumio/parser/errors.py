from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lumio.models.validation import ValidationReport


class PhotometryError(Exception):
    pass


@dataclass
class ParseError(PhotometryError):
    message: str
    line_no: Optional[int] = None
    snippet: Optional[str] = None
    filename: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.filename}: " if self.filename else ""
        if self.line_no is None:
            return f"{prefix}{self.message}"
        return f"{prefix}Line {self.line_no}: {self.message}"


class UnexpectedEndOfInput(ParseError):
    pass


class LineLengthError(ParseError):
    pass


class NoValueError(ParseError):
    pass


class MalformedValueError(ParseError):
    pass


class IESSyntaxError(ParseError):
    pass


class StandardsViolation(ParseError):
    """A line is well formed but breaks the rules of the detected LM-63 revision."""


class UnsupportedFormat(StandardsViolation):
    pass


class KeywordNotAllowed(StandardsViolation):
    pass


class MissingRequiredKeywords(StandardsViolation):
    pass


class BlockNestingError(StandardsViolation):
    pass


class OrphanContinuation(StandardsViolation):
    pass


class UnsupportedTiltFile(StandardsViolation):
    pass


class ValidationError(PhotometryError):
    def __init__(self, report: ValidationReport):
        self.report = report
        errors = report.errors
        first = errors[0].message if errors else "validation failed"
        super().__init__(first)


class ConversionError(PhotometryError):
    pass


class UnsupportedConversion(ConversionError):
    pass
