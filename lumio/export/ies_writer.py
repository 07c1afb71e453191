"""
IESNA LM-63 writer.

Line budgets come from the document's revision: keyword lines are hard
chunked to fit, numeric runs are packed greedily onto data lines without
splitting a number. Every line ends with CR LF.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, List, Sequence, TextIO, Tuple

from lumio.models.ies import IESDocument, IESFormat, IESTilt
from lumio.parser.keywords import (
    FORMAT_LINES,
    LINE_TERMINATOR,
    data_line_budget,
    encoded_length,
    keyword_line_budget,
)
from lumio.validation.defaults import ensure_valid_ies

logger = logging.getLogger(__name__)


def format_scalar(value: float | int) -> str:
    """Shortest text for a header value; integral floats lose their fraction."""
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_fixed(value: float) -> str:
    return f"{value:.2f}"


def pack_tokens(tokens: Iterable[str], budget: int) -> List[str]:
    """Greedily join tokens with single spaces into lines of at most `budget` chars."""
    lines: List[str] = []
    current = ""
    for tok in tokens:
        if current and len(current) + 1 + len(tok) > budget:
            lines.append(current)
            current = ""
        current = f"{current} {tok}" if current else tok
    lines.append(current)
    return lines


def _split_at(text: str, size: int, encoding: str) -> Tuple[str, str]:
    """Longest prefix of `text` that fits in `size` bytes; characters are never split."""
    used = 0
    for i, ch in enumerate(text):
        used += encoded_length(ch, encoding)
        if used > size:
            cut = max(i, 1)
            return text[:cut], text[cut:]
    return text, ""


def _chunk(text: str, size: int, encoding: str) -> List[str]:
    if not text:
        return [""]
    chunks: List[str] = []
    while text:
        head, text = _split_at(text, size, encoding)
        chunks.append(head.strip())
    return chunks


def keyword_lines(fmt: IESFormat, keyword: str, value: str, encoding: str = "utf-8") -> List[str]:
    """Lines for one keyword, each at most the revision's keyword budget in `encoding` bytes."""
    budget = keyword_line_budget(fmt)
    newest = fmt == IESFormat.LM_63_2002
    first_budget = budget - encoded_length(keyword, encoding) - 3  # "[", "]" and space
    more_budget = budget - 7 if newest else budget - 1  # "[MORE] " or leading space

    segments = value.replace("\r\n", "\n").split("\n")
    chunks: List[str] = []
    for i, seg in enumerate(segments):
        seg = seg.strip()
        if i == 0 and encoded_length(seg, encoding) > first_budget:
            head, rest = _split_at(seg, first_budget, encoding)
            chunks.append(head.strip())
            chunks.extend(_chunk(rest.strip(), more_budget, encoding))
        elif i == 0:
            chunks.append(seg)
        else:
            chunks.extend(_chunk(seg, more_budget, encoding))

    lines = [f"[{keyword}] {chunks[0]}".rstrip()]
    for c in chunks[1:]:
        lines.append(f"[MORE] {c}".rstrip() if newest else f" {c}")
    return lines


def _numeric_lines(values: Sequence[float], budget: int) -> List[str]:
    return pack_tokens((format_fixed(v) for v in values), budget)


def ies_lines(doc: IESDocument, encoding: str = "utf-8") -> List[str]:
    lines: List[str] = [FORMAT_LINES.get(doc.format, "")]
    for keyword, value in doc.keywords.items():
        lines.extend(keyword_lines(doc.format, keyword, value, encoding))
    lines.append(f"TILT={doc.tilt.value}")

    budget = data_line_budget(doc.format)
    if doc.tilt == IESTilt.INCLUDE:
        lines.append(str(doc.tilt_lamp_to_luminaire_geometry))
        lines.append(str(doc.tilt_count))
        lines.extend(_numeric_lines(doc.tilt_angles, budget))
        lines.extend(_numeric_lines(doc.tilt_factors, budget))

    header = (
        doc.num_lamps,
        doc.lumens_per_lamp,
        doc.candela_multiplier,
        doc.num_vertical_angles,
        doc.num_horizontal_angles,
        doc.photometric_type,
        doc.units_type,
        doc.width,
        doc.length,
        doc.height,
    )
    lines.extend(pack_tokens((format_scalar(v) for v in header), budget))
    lines.extend(
        pack_tokens((format_scalar(v) for v in (doc.ballast_factor, doc.future_use, doc.input_watts)), budget)
    )
    lines.extend(_numeric_lines(doc.vertical_angles, budget))
    lines.extend(_numeric_lines(doc.horizontal_angles, budget))
    for row in doc.candela_values:
        lines.extend(_numeric_lines(row, budget))
    return lines


def write_ies(doc: IESDocument, stream: TextIO, encoding: str = "utf-8") -> None:
    ensure_valid_ies(doc)
    for line in ies_lines(doc, encoding):
        stream.write(line + LINE_TERMINATOR)


def dumps_ies(doc: IESDocument, encoding: str = "utf-8") -> str:
    buf = io.StringIO(newline="")
    write_ies(doc, buf, encoding)
    return buf.getvalue()


def export_ies(doc: IESDocument, path: str | Path, encoding: str = "utf-8") -> Path:
    """Validate, then write `doc` to `path`. Nothing is created when validation fails."""
    ensure_valid_ies(doc)
    out = Path(path).expanduser()
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding=encoding, errors="replace", newline="") as fh:
        write_ies(doc, fh, encoding)
    logger.debug("wrote %s IES to %s", doc.format.value, out)
    return out
