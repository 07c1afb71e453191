from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import pytest

from lumio.photometry.symmetry import plane_bounds


def build_ldt_lines(
    symmetry: int = 1,
    mc: int = 24,
    ng: int = 19,
    lamp_sets: int = 1,
    intensities: Optional[Sequence[float]] = None,
    company: str = "ACME Lighting",
) -> List[str]:
    dc = 360.0 / mc if mc else 0.0
    dg = 90.0 / (ng - 1) if ng > 1 else 0.0
    lines = [
        company, "1", str(symmetry), str(mc), f"{dc:g}", str(ng), f"{dg:g}",
        "REP-42", "Downlight 100", "DL-100", "dl100", "2024-05-01 jdoe",
        "120", "0", "60", "100", "0", "0", "0", "0", "0",
        "100", "85.5", "1", "0", str(lamp_sets),
    ]
    for i in range(lamp_sets):
        lines += [str(i + 1), f"LED-{i}", f"{1200 + i * 100}", "3000K", "80", "14.5"]
    lines += [f"{0.4 + 0.05 * i:.2f}" for i in range(10)]
    lines += [f"{i * dc:g}" for i in range(mc)]
    lines += [f"{i * dg:g}" for i in range(ng)]
    if intensities is None:
        planes = plane_bounds(symmetry, mc).stored_planes
        intensities = [1000.0 - 50.0 * g + p for p in range(planes) for g in range(ng)]
    lines += [f"{v:g}" for v in intensities]
    return lines


@pytest.fixture
def ldt_text() -> Callable[..., str]:
    def _make(**kwargs) -> str:
        return "\r\n".join(build_ldt_lines(**kwargs)) + "\r\n"

    return _make
