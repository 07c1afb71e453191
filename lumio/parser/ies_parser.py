from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from lumio.models.ies import IESDocument, IESFormat, IESTilt
from lumio.parser.errors import (
    BlockNestingError,
    IESSyntaxError,
    KeywordNotAllowed,
    MalformedValueError,
    MissingRequiredKeywords,
    OrphanContinuation,
    ParseError,
    UnsupportedFormat,
    UnsupportedTiltFile,
)
from lumio.parser.keywords import (
    FORMAT_LINE_MAX_LENGTH,
    FORMAT_TOKENS,
    data_line_budget,
    is_keyword_allowed,
    keyword_line_budget,
    missing_required_keywords,
)
from lumio.parser.line_reader import LineReader, ParseNote, parse_int

logger = logging.getLogger(__name__)


_KEYWORD_RE = re.compile(r"^\[(_*\w*)\](?:\s+(.*))?$")
_CONTINUATION_RE = re.compile(r"^\s+(.*)$")
_TILT_RE = re.compile(r"^TILT\s*=\s*(.*)$")


@dataclass
class _ParseContext:
    """Transient keyword-section state; dropped once the document is built."""
    doc: IESDocument
    reader: LineReader
    inside_block: bool = False
    last_keyword: Optional[str] = None


def _detect_format(line: str, line_no: int) -> IESFormat:
    token = line.lstrip("\ufeff").strip()
    fmt = FORMAT_TOKENS.get(token)
    if fmt is None:
        # LM-63-1986 has no identifier line and cannot be detected
        raise UnsupportedFormat(f"Unsupported or unrecognized IES format '{token}'", line_no=line_no, snippet=line)
    return fmt


def _handle_keyword(ctx: _ParseContext, keyword: str, value: str) -> None:
    doc = ctx.doc
    line_no = ctx.reader.line_no
    if not is_keyword_allowed(doc.format, keyword):
        raise KeywordNotAllowed(
            f"Keyword {keyword} is not allowed for standard {doc.format.value}",
            line_no=line_no,
            snippet=ctx.reader.current,
        )

    if keyword == "BLOCK":
        if ctx.inside_block:
            raise BlockNestingError("BLOCK keyword inside of an open block", line_no=line_no)
        ctx.inside_block = True
    elif keyword == "ENDBLOCK":
        if not ctx.inside_block:
            raise BlockNestingError("ENDBLOCK keyword without a matching BLOCK", line_no=line_no)
        ctx.inside_block = False

    if keyword == "MORE":
        _append_continuation(ctx, value, "Keyword MORE occurred before any other keyword")
        return
    doc.keywords[keyword] = value
    ctx.last_keyword = keyword


def _append_continuation(ctx: _ParseContext, value: str, message: str) -> None:
    if ctx.last_keyword is None or not ctx.doc.keywords:
        raise OrphanContinuation(message, line_no=ctx.reader.line_no, snippet=ctx.reader.current)
    ctx.doc.keywords[ctx.last_keyword] += "\n" + value


def _handle_tilt(ctx: _ParseContext, value: str) -> None:
    doc = ctx.doc
    if ctx.inside_block:
        raise BlockNestingError("BLOCK not closed by ENDBLOCK before TILT", line_no=ctx.reader.line_no)
    missing = missing_required_keywords(doc.format, doc.keywords)
    if missing:
        raise MissingRequiredKeywords(
            f"Required keywords are missing for {doc.format.value}: {', '.join(sorted(missing))}",
            line_no=ctx.reader.line_no,
        )
    if value == "INCLUDE":
        doc.tilt = IESTilt.INCLUDE
    elif value == "NONE":
        doc.tilt = IESTilt.NONE
    else:
        doc.tilt = IESTilt.FILE
        raise UnsupportedTiltFile(
            f"TILT data from an external file is not supported: {value}",
            line_no=ctx.reader.line_no,
            snippet=ctx.reader.current,
        )


def _parse_keyword_section(ctx: _ParseContext) -> None:
    reader = ctx.reader
    budget = keyword_line_budget(ctx.doc.format)
    while True:
        line = reader.next_line(budget)
        m = _KEYWORD_RE.match(line)
        if m:
            _handle_keyword(ctx, m.group(1), (m.group(2) or "").rstrip())
            continue
        m = _TILT_RE.match(line)
        if m:
            _handle_tilt(ctx, m.group(1).rstrip())
            return
        m = _CONTINUATION_RE.match(line)
        if m:
            _append_continuation(ctx, m.group(1).rstrip(), "Continuation line occurred before any keyword")
            continue
        raise IESSyntaxError(f"Expected keyword or TILT line, got '{line}'", line_no=reader.line_no, snippet=line)


def _collect_words(reader: LineReader, count: int, budget: int, last: bool = False) -> List[str]:
    """
    Collect `count` whitespace separated tokens starting at the reader's current
    line, pulling further physical lines as needed. Unless `last` is set, the
    reader is advanced past the run so the next run starts on a fresh line.
    """
    if count <= 0:
        return []
    words: List[str] = []
    while True:
        line = reader.current or ""
        tokens = line.split()
        if len(words) + len(tokens) > count:
            raise IESSyntaxError(
                f"Expected {count} values but line holds {len(words) + len(tokens) - count} extra",
                line_no=reader.line_no,
                snippet=line,
            )
        words.extend(tokens)
        if len(words) == count:
            break
        reader.next_line(budget)
    if not last:
        reader.next_line(budget)
    return words


def _to_float(token: str, line_no: int, field: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise MalformedValueError(f"Invalid float for {field}: '{token}'", line_no=line_no)


def _to_int(token: str, line_no: int, field: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedValueError(f"Invalid integer for {field}: '{token}'", line_no=line_no)


def _floats(reader: LineReader, count: int, budget: int, field: str, last: bool = False) -> List[float]:
    ln = reader.line_no
    words = _collect_words(reader, count, budget, last=last)
    return [_to_float(w, ln, field) for w in words]


def _parse_tilt_include(ctx: _ParseContext, budget: int) -> None:
    doc, reader = ctx.doc, ctx.reader
    doc.tilt_lamp_to_luminaire_geometry = parse_int(reader.current or "", reader.line_no, "lamp_to_luminaire_geometry")
    reader.next_line(budget)
    doc.tilt_count = parse_int(reader.current or "", reader.line_no, "tilt_count")
    if doc.tilt_count < 0:
        raise MalformedValueError("TILT angle/factor count must be >= 0", line_no=reader.line_no)
    reader.next_line(budget)
    doc.tilt_angles = _floats(reader, doc.tilt_count, budget, "tilt_angle")
    doc.tilt_factors = _floats(reader, doc.tilt_count, budget, "tilt_factor")


def _parse_photometric_data(ctx: _ParseContext) -> None:
    doc, reader = ctx.doc, ctx.reader
    budget = data_line_budget(doc.format)
    reader.next_line(budget)

    if doc.tilt == IESTilt.INCLUDE:
        _parse_tilt_include(ctx, budget)

    ln = reader.line_no
    words = _collect_words(reader, 10, budget)
    doc.num_lamps = _to_int(words[0], ln, "num_lamps")
    doc.lumens_per_lamp = _to_float(words[1], ln, "lumens_per_lamp")
    doc.candela_multiplier = _to_float(words[2], ln, "candela_multiplier")
    doc.num_vertical_angles = _to_int(words[3], ln, "num_vertical_angles")
    doc.num_horizontal_angles = _to_int(words[4], ln, "num_horizontal_angles")
    doc.photometric_type = _to_int(words[5], ln, "photometric_type")
    doc.units_type = _to_int(words[6], ln, "units_type")
    doc.width = _to_float(words[7], ln, "width")
    doc.length = _to_float(words[8], ln, "length")
    doc.height = _to_float(words[9], ln, "height")
    if doc.num_vertical_angles < 0 or doc.num_horizontal_angles < 0:
        raise MalformedValueError("Angle counts must be >= 0", line_no=ln)

    # ballast factor, future use, input watts: each at its own position
    ln = reader.line_no
    words = _collect_words(reader, 3, budget)
    doc.ballast_factor = _to_float(words[0], ln, "ballast_factor")
    doc.future_use = _to_float(words[1], ln, "future_use")
    doc.input_watts = _to_float(words[2], ln, "input_watts")

    doc.vertical_angles = _floats(reader, doc.num_vertical_angles, budget, "vertical_angle")
    doc.horizontal_angles = _floats(reader, doc.num_horizontal_angles, budget, "horizontal_angle")

    v = doc.num_vertical_angles
    h = doc.num_horizontal_angles
    flat = _floats(reader, v * h, budget, "candela", last=True)
    # first V values -> row 0 (horizontal angle 0), next V -> row 1, etc.
    doc.candela_values = [flat[i * v : (i + 1) * v] for i in range(h)]


def parse_ies(
    source: Iterable[str],
    strict: bool = False,
    notes: Optional[List[ParseNote]] = None,
    encoding: str = "utf-8",
) -> IESDocument:
    """
    Parse an IESNA LM-63 document from any iterable of lines.

    Lines over the revision's length budget fail under `strict`, otherwise they
    are logged and appended to `notes` when a list is supplied. Budgets are byte
    counts of each line in `encoding`.
    """
    reader = LineReader(source, strict=strict, encoding=encoding)
    try:
        doc = IESDocument()
        doc.format = _detect_format(reader.read_string(FORMAT_LINE_MAX_LENGTH), reader.line_no)
        logger.debug("detected IES format %s", doc.format.value)

        ctx = _ParseContext(doc=doc, reader=reader)
        _parse_keyword_section(ctx)
        _parse_photometric_data(ctx)
        logger.debug(
            "parsed IES: %d keywords, %d x %d candela grid",
            len(doc.keywords),
            doc.num_horizontal_angles,
            doc.num_vertical_angles,
        )
        return doc
    finally:
        if notes is not None:
            notes.extend(reader.notes)


def parse_ies_text(text: str, strict: bool = False, notes: Optional[List[ParseNote]] = None) -> IESDocument:
    return parse_ies(text.splitlines(), strict=strict, notes=notes)


def parse_ies_file(
    path: str | Path,
    strict: bool = False,
    encoding: str = "utf-8",
    notes: Optional[List[ParseNote]] = None,
) -> IESDocument:
    p = Path(path).expanduser()
    try:
        with p.open("r", encoding=encoding, errors="replace") as fh:
            return parse_ies(fh, strict=strict, notes=notes, encoding=encoding)
    except ParseError as e:
        if e.filename is None:
            e.filename = str(p)
        raise
