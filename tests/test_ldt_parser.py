from __future__ import annotations

from pathlib import Path

import pytest

from conftest import build_ldt_lines
from lumio.parser.errors import (
    LineLengthError,
    MalformedValueError,
    NoValueError,
    ParseError,
    UnexpectedEndOfInput,
)
from lumio.parser.ldt_parser import parse_ldt_file, parse_ldt_text
from lumio.parser.line_reader import ParseNote


def test_parse_rotationally_symmetric_sample(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=1, mc=24, ng=19))
    assert doc.company == "ACME Lighting"
    assert doc.symmetry == 1
    assert doc.num_c_planes == 24
    assert doc.num_g_angles == 19
    assert doc.c_plane_spacing == 15.0
    assert doc.g_angle_spacing == 5.0
    assert doc.luminaire_name == "Downlight 100"
    assert doc.lorl_percent == pytest.approx(85.5)
    assert tuple(doc.bounds) == (1, 1, 1)
    assert len(doc.intensity_raw) == 19
    assert len(doc.intensity_by_plane) == 1
    assert doc.intensity_by_plane[0] == doc.intensity_raw
    assert len(doc.angles_c) == 24
    assert doc.angles_g[-1] == 90.0
    assert doc.direct_ratios[0] == pytest.approx(0.4)
    assert len(doc.direct_ratios) == 10


@pytest.mark.parametrize(
    "symmetry,planes",
    [(0, 24), (2, 13), (3, 13), (4, 7)],
)
def test_intensity_run_length_follows_symmetry(ldt_text, symmetry, planes):
    doc = parse_ldt_text(ldt_text(symmetry=symmetry, mc=24, ng=19))
    assert len(doc.intensity_raw) == planes * 19
    assert len(doc.intensity_by_plane) == planes
    assert all(len(p) == 19 for p in doc.intensity_by_plane)
    # plane p carries the +p offset from the fixture
    assert doc.intensity_by_plane[-1][0] == 1000.0 + planes - 1


def test_multiple_lamp_sets(ldt_text):
    doc = parse_ldt_text(ldt_text(lamp_sets=3))
    assert doc.num_lamp_sets == 3
    assert doc.lamp_counts == [1, 2, 3]
    assert doc.lamp_types == ["LED-0", "LED-1", "LED-2"]
    assert doc.lamp_flux == [1200.0, 1300.0, 1400.0]
    assert [s.wattage for s in doc.lamp_sets] == [14.5, 14.5, 14.5]


def test_decimal_comma_and_thousands_separators():
    lines = build_ldt_lines()
    lines[22] = "85,5"       # LORL
    lines[28] = "1_200"      # first lamp set flux
    doc = parse_ldt_text("\n".join(lines))
    assert doc.lorl_percent == pytest.approx(85.5)
    assert doc.lamp_flux == [1200.0]


def test_empty_numeric_line_is_no_value():
    lines = build_ldt_lines()
    lines[3] = "   "
    with pytest.raises(NoValueError):
        parse_ldt_text("\n".join(lines))


def test_malformed_numeric_line():
    lines = build_ldt_lines()
    lines[5] = "nineteen"
    with pytest.raises(MalformedValueError) as ei:
        parse_ldt_text("\n".join(lines))
    assert ei.value.line_no == 6


def test_invalid_symmetry_indicator():
    lines = build_ldt_lines()
    lines[2] = "7"
    with pytest.raises(MalformedValueError):
        parse_ldt_text("\n".join(lines))


def test_truncated_intensities():
    lines = build_ldt_lines(symmetry=1, mc=24, ng=19)[:-1]
    with pytest.raises(UnexpectedEndOfInput):
        parse_ldt_text("\n".join(lines))


def test_long_company_strict_and_lenient():
    text = "\n".join(build_ldt_lines(company="X" * 80))
    with pytest.raises(LineLengthError):
        parse_ldt_text(text, strict=True)
    notes: list[ParseNote] = []
    doc = parse_ldt_text(text, notes=notes)
    assert doc.company == "X" * 80
    assert [n.line_no for n in notes] == [1]


def test_parse_file_attaches_filename(tmp_path: Path):
    p = tmp_path / "short.ldt"
    p.write_text("\r\n".join(build_ldt_lines()[:10]) + "\r\n", encoding="latin-1")
    with pytest.raises(ParseError) as ei:
        parse_ldt_file(p)
    assert ei.value.filename == str(p)


def test_parse_file_latin1(tmp_path: Path):
    p = tmp_path / "lamp.ldt"
    lines = build_ldt_lines(company="Lichtwerk Köln")
    p.write_bytes(("\r\n".join(lines) + "\r\n").encode("latin-1"))
    doc = parse_ldt_file(p)
    assert doc.company == "Lichtwerk Köln"
