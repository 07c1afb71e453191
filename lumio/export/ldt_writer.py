from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, TextIO

from lumio.models.eulumdat import EulumdatDocument
from lumio.parser.keywords import LINE_TERMINATOR
from lumio.validation.defaults import ensure_valid_ldt

logger = logging.getLogger(__name__)


def _f(value: float) -> str:
    return f"{value:f}"


def ldt_lines(doc: EulumdatDocument) -> List[str]:
    lines: List[str] = [
        doc.company,
        str(doc.type_indicator),
        str(doc.symmetry),
        str(doc.num_c_planes),
        _f(doc.c_plane_spacing),
        str(doc.num_g_angles),
        _f(doc.g_angle_spacing),
        doc.report_number,
        doc.luminaire_name,
        doc.luminaire_number,
        doc.filename,
        doc.date_user,
    ]
    lines.extend(
        _f(v)
        for v in (
            doc.length_mm,
            doc.width_mm,
            doc.height_mm,
            doc.luminous_length_mm,
            doc.luminous_width_mm,
            doc.luminous_height_c0_mm,
            doc.luminous_height_c90_mm,
            doc.luminous_height_c180_mm,
            doc.luminous_height_c270_mm,
            doc.dff_percent,
            doc.lorl_percent,
            doc.conversion_factor,
            doc.tilt_degrees,
        )
    )
    lines.append(str(doc.num_lamp_sets))

    for lamp in doc.lamp_sets:
        lines.extend(
            [
                str(lamp.num_lamps),
                lamp.lamp_type,
                _f(lamp.total_flux),
                lamp.color_temperature,
                lamp.color_rendering,
                _f(lamp.wattage),
            ]
        )

    lines.extend(_f(v) for v in doc.direct_ratios)
    lines.extend(_f(v) for v in doc.angles_c)
    lines.extend(_f(v) for v in doc.angles_g)

    # never trust a cached plane count; size the run from the symmetry indicator
    n = doc.bounds.stored_planes * doc.num_g_angles
    lines.extend(_f(v) for v in doc.intensity_raw[:n])
    return lines


def write_ldt(doc: EulumdatDocument, stream: TextIO) -> None:
    ensure_valid_ldt(doc)
    for line in ldt_lines(doc):
        stream.write(line + LINE_TERMINATOR)


def dumps_ldt(doc: EulumdatDocument) -> str:
    buf = io.StringIO(newline="")
    write_ldt(doc, buf)
    return buf.getvalue()


def export_ldt(doc: EulumdatDocument, path: str | Path, encoding: str = "latin-1") -> Path:
    ensure_valid_ldt(doc)
    out = Path(path).expanduser()
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding=encoding, errors="replace", newline="") as fh:
        write_ldt(doc, fh)
    logger.debug("wrote EULUMDAT to %s", out)
    return out
