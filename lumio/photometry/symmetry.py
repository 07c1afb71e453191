from __future__ import annotations

from typing import List, NamedTuple, Sequence


class PlaneBounds(NamedTuple):
    mc1: int  # first stored C-plane, 1-based
    mc2: int  # last stored C-plane, 1-based
    mc: int   # number of planes the raw intensities are split into

    @property
    def stored_planes(self) -> int:
        return self.mc2 - self.mc1 + 1


def plane_bounds(symmetry: int, num_c_planes: int) -> PlaneBounds:
    """
    Stored C-plane range for a EULUMDAT symmetry indicator.

        I_sym   mc1           mc2            mc
        0       1             Mc             Mc
        1       1             1              1
        2       1             Mc/2+1         Mc/2+1
        3       3*Mc/4+1      mc1+Mc/2       Mc/2+1
        4       1             Mc/4+1         Mc/4+1
    """
    mc = num_c_planes
    if symmetry == 0:
        return PlaneBounds(1, mc, mc)
    if symmetry == 1:
        return PlaneBounds(1, 1, 1)
    if symmetry == 2:
        return PlaneBounds(1, mc // 2 + 1, mc // 2 + 1)
    if symmetry == 3:
        mc1 = 3 * mc // 4 + 1
        return PlaneBounds(mc1, mc1 + mc // 2, mc // 2 + 1)
    if symmetry == 4:
        return PlaneBounds(1, mc // 4 + 1, mc // 4 + 1)
    raise ValueError(f"Unsupported symmetry indicator: {symmetry} (expected 0-4)")


def raw_intensity_length(symmetry: int, num_c_planes: int, num_g_angles: int) -> int:
    return plane_bounds(symmetry, num_c_planes).stored_planes * num_g_angles


def split_planes(raw: Sequence[float], symmetry: int, num_c_planes: int, num_g_angles: int) -> List[List[float]]:
    """Slice a flat intensity run into `mc` planes of `num_g_angles` values each."""
    mc = plane_bounds(symmetry, num_c_planes).mc
    ng = num_g_angles
    if len(raw) < mc * ng:
        raise ValueError(f"Raw intensity array holds {len(raw)} values, {mc} planes of {ng} need {mc * ng}")
    return [list(raw[i * ng : (i + 1) * ng]) for i in range(mc)]
