from __future__ import annotations

from typing import Any

__all__ = [
    "PlaneBounds",
    "plane_bounds",
    "raw_intensity_length",
    "eulumdat_to_ies",
    "ies_to_eulumdat",
    "upgrade_ies",
]


def __getattr__(name: str) -> Any:
    if name in {"PlaneBounds", "plane_bounds", "raw_intensity_length"}:
        from lumio.photometry.symmetry import PlaneBounds, plane_bounds, raw_intensity_length

        return {
            "PlaneBounds": PlaneBounds,
            "plane_bounds": plane_bounds,
            "raw_intensity_length": raw_intensity_length,
        }[name]
    if name in {"eulumdat_to_ies", "ies_to_eulumdat"}:
        from lumio.photometry.conversion import eulumdat_to_ies, ies_to_eulumdat

        return {"eulumdat_to_ies": eulumdat_to_ies, "ies_to_eulumdat": ies_to_eulumdat}[name]
    if name == "upgrade_ies":
        from lumio.photometry.upgrade import upgrade_ies

        return upgrade_ies
    raise AttributeError(name)
