from __future__ import annotations

from pathlib import Path

import pytest

from lumio.export.ies_writer import dumps_ies, export_ies
from lumio.models.ies import IESFormat, IESTilt
from lumio.parser.errors import ConversionError, UnsupportedConversion, ValidationError
from lumio.parser.ies_parser import parse_ies_text
from lumio.parser.ldt_parser import parse_ldt_text
from lumio.photometry import eulumdat_to_ies, ies_to_eulumdat


def test_rotationally_symmetric_luminaire(ldt_text):
    ldt = parse_ldt_text(ldt_text(symmetry=1, mc=24, ng=19))
    ies = eulumdat_to_ies(ldt)
    assert ies.format == IESFormat.LM_63_2002
    assert ies.tilt == IESTilt.NONE
    assert ies.num_vertical_angles == 19
    assert ies.vertical_angles == ldt.angles_g
    assert ies.num_horizontal_angles == 1
    assert ies.horizontal_angles == [0.0]
    assert len(ies.candela_values) == 1
    assert ies.candela_values[0] == ldt.intensity_by_plane[0]
    assert ies.candela_multiplier == 1.0
    assert ies.photometric_type == 1
    assert ies.units_type == 2


def test_keyword_and_scalar_mapping(ldt_text):
    ies = eulumdat_to_ies(parse_ldt_text(ldt_text()))
    assert ies.keywords == {
        "TEST": "REP-42",
        "TESTLAB": "ACME Lighting",
        "ISSUEDATE": "2024-05-01 jdoe",
        "MANUFAC": "ACME Lighting",
        "LUMINAIRE": "Downlight 100",
        "LUMCAT": "DL-100",
        "LAMP": "LED-0",
        "OTHER": "converted from EULUMDAT: dl100",
    }
    assert ies.num_lamps == 1
    assert ies.lumens_per_lamp == 1200.0
    assert ies.input_watts == 14.5
    assert ies.length == 120.0
    assert ies.width == 0.0
    assert ies.height == 60.0
    assert ies.ballast_factor == 1.0


def test_only_first_lamp_set_is_used(ldt_text):
    ies = eulumdat_to_ies(parse_ldt_text(ldt_text(lamp_sets=3)))
    assert ies.num_lamps == 1
    assert ies.keywords["LAMP"] == "LED-0"
    assert ies.lumens_per_lamp == 1200.0


def test_document_without_lamp_sets_fails(ldt_text):
    ldt = parse_ldt_text(ldt_text(lamp_sets=0))
    with pytest.raises(ConversionError):
        eulumdat_to_ies(ldt)


def test_input_is_not_mutated(ldt_text):
    ldt = parse_ldt_text(ldt_text(symmetry=2))
    before = ldt.copy()
    ies = eulumdat_to_ies(ldt)
    ies.candela_values[0][0] = -1.0
    ies.vertical_angles.append(999.0)
    assert ldt == before


def test_converted_document_exports_and_reparses(tmp_path: Path, ldt_text):
    ies = eulumdat_to_ies(parse_ldt_text(ldt_text()))
    out = export_ies(ies, tmp_path / "converted.ies")
    again = parse_ies_text(out.read_bytes().decode("ascii"), strict=True)
    assert again == ies


def test_multi_plane_conversion_does_not_export(ldt_text):
    # every stored plane becomes a candela row, but only one horizontal angle is declared
    ies = eulumdat_to_ies(parse_ldt_text(ldt_text(symmetry=0, mc=4, ng=3)))
    assert len(ies.candela_values) == 4
    with pytest.raises(ValidationError) as ei:
        dumps_ies(ies)
    assert "CandelaValues horizontal" in str(ei.value)


def test_reverse_direction_is_unsupported():
    ies = parse_ies_text("IESNA:LM-63-1995\n[TEST] t\nTILT=NONE\n1 1 1 1 1 1 2 0 0 0\n1 1 0\n0\n0\n5\n")
    with pytest.raises(UnsupportedConversion):
        ies_to_eulumdat(ies)


def test_conversion_uses_raw_intensities(ldt_text):
    ldt = parse_ldt_text(ldt_text())
    ldt.intensity_raw[0] = 5000.0
    assert eulumdat_to_ies(ldt).candela_values[0][0] == 5000.0


def test_short_raw_intensities_fail_conversion(ldt_text):
    ldt = parse_ldt_text(ldt_text())
    ldt.intensity_raw.pop()
    with pytest.raises(ConversionError):
        eulumdat_to_ies(ldt)


def test_non_ascii_luminaire_text_survives_export(tmp_path: Path, ldt_text):
    ldt = parse_ldt_text(ldt_text(company="Lichtwerk Köln"))
    out = export_ies(eulumdat_to_ies(ldt), tmp_path / "koeln.ies")
    again = parse_ies_text(out.read_text(encoding="utf-8"), strict=True)
    assert again.keywords["MANUFAC"] == "Lichtwerk Köln"
