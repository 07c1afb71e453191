from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class IESFormat(str, Enum):
    UNKNOWN = "UNKNOWN"
    LM_63_1986 = "LM-63-1986"
    LM_63_1991 = "LM-63-1991"
    LM_63_1995 = "LM-63-1995"
    LM_63_2002 = "LM-63-2002"


class IESTilt(str, Enum):
    INCLUDE = "INCLUDE"  # lamp output varies with tilt; data follows inline
    FILE = "FILE"        # tilt data in an external file (unsupported)
    NONE = "NONE"


@dataclass
class IESDocument:
    format: IESFormat = IESFormat.UNKNOWN
    # MORE/continuation lines are joined into the owning keyword's value with "\n"
    keywords: Dict[str, str] = field(default_factory=dict)
    tilt: IESTilt = IESTilt.NONE

    # only meaningful for TILT=INCLUDE
    tilt_lamp_to_luminaire_geometry: int = 0  # 1, 2 or 3
    tilt_count: int = 0
    tilt_angles: List[float] = field(default_factory=list)
    tilt_factors: List[float] = field(default_factory=list)

    num_lamps: int = 0
    lumens_per_lamp: float = 0.0
    candela_multiplier: float = 1.0
    num_vertical_angles: int = 0
    num_horizontal_angles: int = 0
    photometric_type: int = 1   # 1=C, 2=B, 3=A
    units_type: int = 2         # 1=feet, 2=meters
    width: float = 0.0
    length: float = 0.0
    height: float = 0.0
    ballast_factor: float = 1.0
    future_use: float = 1.0
    input_watts: float = 0.0

    vertical_angles: List[float] = field(default_factory=list)
    horizontal_angles: List[float] = field(default_factory=list)
    # Shape: [H][V], one row per horizontal angle
    candela_values: List[List[float]] = field(default_factory=list)
