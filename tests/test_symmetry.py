from __future__ import annotations

import pytest

from conftest import build_ldt_lines
from lumio.parser.ldt_parser import parse_ldt_text
from lumio.photometry.symmetry import PlaneBounds, plane_bounds, raw_intensity_length


@pytest.mark.parametrize(
    "symmetry,expected",
    [
        (0, PlaneBounds(1, 24, 24)),
        (1, PlaneBounds(1, 1, 1)),
        (2, PlaneBounds(1, 13, 13)),
        (3, PlaneBounds(19, 31, 13)),
        (4, PlaneBounds(1, 7, 7)),
    ],
)
def test_plane_bounds_table(symmetry, expected):
    assert plane_bounds(symmetry, 24) == expected


def test_invalid_symmetry_raises():
    with pytest.raises(ValueError):
        plane_bounds(5, 24)
    with pytest.raises(ValueError):
        plane_bounds(-1, 24)


def test_stored_planes_match_plane_count_for_all_sizes():
    for mc in range(1, 73):
        for symmetry in range(5):
            b = plane_bounds(symmetry, mc)
            assert b.stored_planes == b.mc, (symmetry, mc)
            assert raw_intensity_length(symmetry, mc, 19) == b.mc * 19


@pytest.mark.parametrize("symmetry", [0, 1, 2, 3, 4])
@pytest.mark.parametrize("mc", [4, 8, 36])
def test_reshape_consumes_every_value(symmetry, mc):
    ng = 7
    n = raw_intensity_length(symmetry, mc, ng)
    doc = parse_ldt_text("\n".join(build_ldt_lines(symmetry=symmetry, mc=mc, ng=ng, intensities=list(range(n)))))
    flat = [v for plane in doc.intensity_by_plane for v in plane]
    assert flat == [float(v) for v in range(n)]
    assert len(doc.intensity_by_plane) == doc.bounds.mc


def test_recompute_planes_refuses_short_array():
    doc = parse_ldt_text("\n".join(build_ldt_lines(symmetry=0, mc=4, ng=3)))
    doc.intensity_raw = doc.intensity_raw[:-1]
    with pytest.raises(ValueError):
        doc.recompute_planes()
