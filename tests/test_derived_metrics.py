from __future__ import annotations

import pytest

from lumio.derived.metrics import fwhm, fwtm, max_intensity, plane_index
from lumio.models.eulumdat import EulumdatDocument
from lumio.parser.ldt_parser import parse_ldt_text


def test_max_intensity(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=2))
    assert max_intensity(doc) == 1012.0
    assert max_intensity(doc, plane=0) == 1000.0


def test_max_intensity_of_empty_document_is_zero():
    assert max_intensity(EulumdatDocument()) == 0.0


def test_beam_widths_rotationally_symmetric(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=1, mc=24, ng=19))
    # 1000 cd/klm on axis, 50 less every 5 degrees
    assert fwhm(doc) == pytest.approx(100.0)
    assert fwtm(doc) == pytest.approx(180.0)


def test_beam_widths_undefined_without_symmetry(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=0))
    assert fwhm(doc) is None
    assert fwtm(doc) is None


def test_plane_index_for_full_set(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=0, mc=24))
    assert plane_index(doc, 0.0) == 0
    assert plane_index(doc, 90.0) == 6
    assert plane_index(doc, 7.0) is None


def test_plane_index_wraps_for_c90_c270_symmetry(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=3, mc=24))
    assert plane_index(doc, 270.0) == 0
    assert plane_index(doc, 0.0) == 6
    assert plane_index(doc, 90.0) == 12
    assert plane_index(doc, 180.0) is None


def test_queries_read_raw_intensities_without_touching_cache(ldt_text):
    doc = parse_ldt_text(ldt_text(symmetry=1))
    doc.intensity_raw[0] = 5000.0
    assert max_intensity(doc) == 5000.0
    assert doc.intensity_by_plane[0][0] == 1000.0

    doc.intensity_by_plane = []
    assert max_intensity(doc, plane=0) == 5000.0
    assert doc.intensity_by_plane == []
