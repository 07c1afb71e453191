from __future__ import annotations

from typing import Optional

import numpy as np

from lumio.models.eulumdat import EulumdatDocument
from lumio.photometry.symmetry import split_planes


# beam widths only make sense when every stored plane describes the same curve
_BEAM_SYMMETRIES = (1, 4)


def _planes(doc: EulumdatDocument) -> np.ndarray:
    # always from the raw run; intensity_by_plane may be stale after edits
    planes = split_planes(doc.intensity_raw, doc.symmetry, doc.num_c_planes, doc.num_g_angles)
    return np.asarray(planes, dtype=float)


def max_intensity(doc: EulumdatDocument, plane: Optional[int] = None) -> float:
    """Peak cd/klm in one stored plane (0-based) or in all planes."""
    data = _planes(doc)
    values = data if plane is None else data[plane]
    if values.size == 0:
        return 0.0
    return float(np.max(values))


def plane_index(doc: EulumdatDocument, c_angle: float) -> Optional[int]:
    """
    Index into intensity_by_plane for the plane measured at exactly `c_angle`,
    or None when no stored plane has that angle.
    """
    bounds = doc.bounds
    for i, angle in enumerate(doc.angles_c):
        if angle != c_angle:
            continue
        # symmetry 3 stores C270..C90, wrapping through C0
        k = (i - (bounds.mc1 - 1)) % max(doc.num_c_planes, 1)
        if k < bounds.mc:
            return k
    return None


def beam_width(doc: EulumdatDocument, plane: int, fraction: float) -> Optional[float]:
    """
    Full angular width where intensity falls to `fraction` of the plane maximum.

    Picks the G angle (<= 90 deg) whose intensity is nearest to the threshold and
    doubles it. Returns None unless the luminaire is rotationally symmetric or
    symmetric about both planes.
    """
    if doc.symmetry not in _BEAM_SYMMETRIES:
        return None
    curve = _planes(doc)[plane]
    angles = np.asarray(doc.angles_g, dtype=float)
    mask = angles <= 90.0
    if curve.size == 0 or not mask.any():
        return None
    target = float(np.max(curve)) * fraction
    idx = int(np.argmin(np.abs(curve[mask] - target)))
    return float(2.0 * angles[mask][idx])


def fwhm(doc: EulumdatDocument, plane: int = 0) -> Optional[float]:
    return beam_width(doc, plane, 0.5)


def fwtm(doc: EulumdatDocument, plane: int = 0) -> Optional[float]:
    return beam_width(doc, plane, 0.1)
