"""
EULUMDAT (.ldt) document model.

Field order mirrors the file layout:
- Line 1: Company identification
- Line 2: Type indicator (1-3)
- Line 3: Symmetry indicator (0-4)
- Line 4: Number of C-planes (Mc)
- Line 5: Distance between C-planes (Dc)
- Line 6: Number of luminous intensities per C-plane (Ng)
- Line 7: Distance between luminous intensities (Dg)
- Line 8: Measurement report number
- Line 9: Luminaire name
- Line 10: Luminaire number
- Line 11: File name (DOS, 8 chars)
- Line 12: Date/user
- Lines 13-21: Luminaire and luminous area dimensions (mm)
- Line 22: Downward flux fraction (DFF) %
- Line 23: Light output ratio luminaire (LORL) %
- Line 24: Conversion factor for luminous intensities
- Line 25: Tilt of luminaire during measurement
- Line 26: Number of lamp sets (n), followed by 6 lines per set
- Then: 10 direct ratios, Mc C-angles, Ng G-angles, intensities (cd/klm)
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List

from lumio.photometry.symmetry import PlaneBounds, plane_bounds, split_planes


@dataclass(frozen=True)
class LampSet:
    """One lamp assembly, assembled from the parallel per-set arrays."""
    num_lamps: int
    lamp_type: str
    total_flux: float  # lumens
    color_temperature: str
    color_rendering: str
    wattage: float


@dataclass
class EulumdatDocument:
    company: str = ""
    type_indicator: int = 1     # 1=point (vertical axis symmetry), 2=linear, 3=point (other)
    symmetry: int = 0           # 0=none, 1=vertical axis, 2=C0-C180, 3=C90-C270, 4=both
    num_c_planes: int = 0
    c_plane_spacing: float = 0.0
    num_g_angles: int = 0
    g_angle_spacing: float = 0.0
    report_number: str = ""
    luminaire_name: str = ""
    luminaire_number: str = ""
    filename: str = ""
    date_user: str = ""

    length_mm: float = 0.0
    width_mm: float = 0.0       # 0 for circular
    height_mm: float = 0.0
    luminous_length_mm: float = 0.0
    luminous_width_mm: float = 0.0
    luminous_height_c0_mm: float = 0.0
    luminous_height_c90_mm: float = 0.0
    luminous_height_c180_mm: float = 0.0
    luminous_height_c270_mm: float = 0.0

    dff_percent: float = 0.0
    lorl_percent: float = 0.0
    conversion_factor: float = 1.0
    tilt_degrees: float = 0.0

    num_lamp_sets: int = 0
    lamp_counts: List[int] = field(default_factory=list)
    lamp_types: List[str] = field(default_factory=list)
    lamp_flux: List[float] = field(default_factory=list)
    color_temperatures: List[str] = field(default_factory=list)
    color_rendering: List[str] = field(default_factory=list)
    ballast_watts: List[float] = field(default_factory=list)

    # room indices k = 0.6 ... 5
    direct_ratios: List[float] = field(default_factory=lambda: [0.0] * 10)
    angles_c: List[float] = field(default_factory=list)
    angles_g: List[float] = field(default_factory=list)
    # cd/klm, (mc2 - mc1 + 1) * Ng values
    intensity_raw: List[float] = field(default_factory=list)
    # Shape: [mc][Ng]; derived from intensity_raw by recompute_planes()
    intensity_by_plane: List[List[float]] = field(default_factory=list)

    @property
    def bounds(self) -> PlaneBounds:
        return plane_bounds(self.symmetry, self.num_c_planes)

    @property
    def lamp_sets(self) -> List[LampSet]:
        return [
            LampSet(
                num_lamps=self.lamp_counts[i],
                lamp_type=self.lamp_types[i],
                total_flux=self.lamp_flux[i],
                color_temperature=self.color_temperatures[i],
                color_rendering=self.color_rendering[i],
                wattage=self.ballast_watts[i],
            )
            for i in range(self.num_lamp_sets)
        ]

    def recompute_planes(self) -> List[List[float]]:
        """Split intensity_raw into one list of Ng values per C-plane."""
        self.intensity_by_plane = split_planes(self.intensity_raw, self.symmetry, self.num_c_planes, self.num_g_angles)
        return self.intensity_by_plane

    def copy(self) -> "EulumdatDocument":
        return copy.deepcopy(self)
