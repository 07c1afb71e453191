"""
EULUMDAT (.ldt) parser.

EULUMDAT is strictly positional: one scalar or one array element per line, in
the order documented on `lumio.models.eulumdat`. The number of intensity lines
depends on the symmetry indicator (see `lumio.photometry.symmetry`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from lumio.models.eulumdat import EulumdatDocument
from lumio.parser.errors import MalformedValueError, ParseError
from lumio.parser.keywords import LDT_FIELD_WIDTHS
from lumio.parser.line_reader import LineReader, ParseNote

logger = logging.getLogger(__name__)


def _read_text(reader: LineReader, field: str) -> str:
    return reader.read_string(LDT_FIELD_WIDTHS[field])


def _read_header(reader: LineReader, doc: EulumdatDocument) -> None:
    doc.company = _read_text(reader, "company")
    doc.type_indicator = reader.read_int("type_indicator")
    doc.symmetry = reader.read_int("symmetry")
    if doc.symmetry not in (0, 1, 2, 3, 4):
        raise MalformedValueError(
            f"Invalid symmetry indicator: {doc.symmetry} (expected 0-4)", line_no=reader.line_no
        )
    doc.num_c_planes = reader.read_int("num_c_planes")
    doc.c_plane_spacing = reader.read_float("c_plane_spacing")
    doc.num_g_angles = reader.read_int("num_g_angles")
    doc.g_angle_spacing = reader.read_float("g_angle_spacing")
    if doc.num_c_planes < 0 or doc.num_g_angles < 0:
        raise MalformedValueError("C-plane and G-angle counts must be >= 0", line_no=reader.line_no)

    doc.report_number = _read_text(reader, "report_number")
    doc.luminaire_name = _read_text(reader, "luminaire_name")
    doc.luminaire_number = _read_text(reader, "luminaire_number")
    doc.filename = _read_text(reader, "filename")
    doc.date_user = _read_text(reader, "date_user")

    doc.length_mm = reader.read_float("length")
    doc.width_mm = reader.read_float("width")
    doc.height_mm = reader.read_float("height")
    doc.luminous_length_mm = reader.read_float("luminous_length")
    doc.luminous_width_mm = reader.read_float("luminous_width")
    doc.luminous_height_c0_mm = reader.read_float("luminous_height_c0")
    doc.luminous_height_c90_mm = reader.read_float("luminous_height_c90")
    doc.luminous_height_c180_mm = reader.read_float("luminous_height_c180")
    doc.luminous_height_c270_mm = reader.read_float("luminous_height_c270")

    doc.dff_percent = reader.read_float("dff_percent")
    doc.lorl_percent = reader.read_float("lorl_percent")
    doc.conversion_factor = reader.read_float("conversion_factor")
    doc.tilt_degrees = reader.read_float("tilt")
    doc.num_lamp_sets = reader.read_int("num_lamp_sets")
    if doc.num_lamp_sets < 0:
        raise MalformedValueError("Number of lamp sets must be >= 0", line_no=reader.line_no)


def _read_lamp_sets(reader: LineReader, doc: EulumdatDocument) -> None:
    for i in range(doc.num_lamp_sets):
        doc.lamp_counts.append(reader.read_int(f"lamp_set_{i}_num"))
        doc.lamp_types.append(_read_text(reader, "lamp_types"))
        doc.lamp_flux.append(reader.read_float(f"lamp_set_{i}_flux"))
        doc.color_temperatures.append(_read_text(reader, "color_temperatures"))
        doc.color_rendering.append(_read_text(reader, "color_rendering"))
        doc.ballast_watts.append(reader.read_float(f"lamp_set_{i}_wattage"))


def parse_ldt(
    source: Iterable[str],
    strict: bool = False,
    notes: Optional[List[ParseNote]] = None,
    encoding: str = "latin-1",
) -> EulumdatDocument:
    reader = LineReader(source, strict=strict, encoding=encoding)
    try:
        doc = EulumdatDocument()
        _read_header(reader, doc)
        _read_lamp_sets(reader, doc)

        doc.direct_ratios = [reader.read_float(f"direct_ratio_{i}") for i in range(10)]
        doc.angles_c = [reader.read_float(f"c_plane_{i}") for i in range(doc.num_c_planes)]
        doc.angles_g = [reader.read_float(f"g_angle_{i}") for i in range(doc.num_g_angles)]

        # mc1/mc2 always re-derived from the symmetry indicator
        n = doc.bounds.stored_planes * doc.num_g_angles
        doc.intensity_raw = [reader.read_float("intensity") for _ in range(n)]
        doc.recompute_planes()

        logger.debug(
            "parsed EULUMDAT: symmetry %d, %d C-planes, %d G-angles, %d intensities",
            doc.symmetry,
            doc.num_c_planes,
            doc.num_g_angles,
            n,
        )
        return doc
    finally:
        if notes is not None:
            notes.extend(reader.notes)


def parse_ldt_text(text: str, strict: bool = False, notes: Optional[List[ParseNote]] = None) -> EulumdatDocument:
    return parse_ldt(text.splitlines(), strict=strict, notes=notes)


def parse_ldt_file(
    path: str | Path,
    strict: bool = False,
    encoding: str = "latin-1",
    notes: Optional[List[ParseNote]] = None,
) -> EulumdatDocument:
    p = Path(path).expanduser()
    try:
        with p.open("r", encoding=encoding, errors="replace") as fh:
            return parse_ldt(fh, strict=strict, notes=notes, encoding=encoding)
    except ParseError as e:
        if e.filename is None:
            e.filename = str(p)
        raise
