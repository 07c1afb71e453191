from __future__ import annotations

from typing import List

from lumio.models.eulumdat import EulumdatDocument
from lumio.models.validation import ValidationFinding
from lumio.parser.keywords import LDT_FIELD_WIDTHS


_LAMP_ARRAYS = (
    "lamp_counts",
    "lamp_types",
    "lamp_flux",
    "color_temperatures",
    "color_rendering",
    "ballast_watts",
)


def _mismatch(rule_id: str, name: str, declared: int, actual: int) -> ValidationFinding:
    return ValidationFinding(
        id=rule_id,
        severity="ERROR",
        title=f"{name} length mismatch",
        message=f"{name} length mismatch: expected {declared}, found {actual}",
        evidence={"array": name, "declared": declared, "actual": actual},
    )


class RuleSymmetryIndicator:
    id = "LDT_SYMMETRY"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        if doc.symmetry in (0, 1, 2, 3, 4):
            return []
        return [
            ValidationFinding(
                id=self.id,
                severity="ERROR",
                title="Invalid symmetry indicator",
                message=f"Invalid symmetry indicator: {doc.symmetry} (expected 0-4)",
                evidence={"symmetry": doc.symmetry},
            )
        ]


class RuleLampSetArrays:
    id = "LDT_LAMP_SETS"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        return [
            _mismatch(self.id, name, doc.num_lamp_sets, len(getattr(doc, name)))
            for name in _LAMP_ARRAYS
            if len(getattr(doc, name)) != doc.num_lamp_sets
        ]


class RuleDirectRatios:
    id = "LDT_DIRECT_RATIOS"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        if len(doc.direct_ratios) == 10:
            return []
        return [_mismatch(self.id, "direct_ratios", 10, len(doc.direct_ratios))]


class RuleAngleArrays:
    id = "LDT_ANGLES"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        out: List[ValidationFinding] = []
        if len(doc.angles_c) != doc.num_c_planes:
            out.append(_mismatch(self.id, "angles_c", doc.num_c_planes, len(doc.angles_c)))
        if len(doc.angles_g) != doc.num_g_angles:
            out.append(_mismatch(self.id, "angles_g", doc.num_g_angles, len(doc.angles_g)))
        return out


class RuleIntensityLength:
    id = "LDT_INTENSITY"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        if doc.symmetry not in (0, 1, 2, 3, 4):
            return []  # reported by RuleSymmetryIndicator
        expected = doc.bounds.stored_planes * doc.num_g_angles
        if len(doc.intensity_raw) == expected:
            return []
        return [_mismatch(self.id, "intensity_raw", expected, len(doc.intensity_raw))]


class RuleFieldWidths:
    id = "LDT_FIELD_WIDTH"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        out: List[ValidationFinding] = []
        for name, width in LDT_FIELD_WIDTHS.items():
            value = getattr(doc, name)
            values = value if isinstance(value, list) else [value]
            for v in values:
                if len(v) > width:
                    out.append(
                        ValidationFinding(
                            id=self.id,
                            severity="ERROR",
                            title=f"{name} too long",
                            message=f"{name} exceeds {width} characters: '{v}'",
                            evidence={"field": name, "width": width, "length": len(v)},
                        )
                    )
        return out


class RuleTypeIndicator:
    id = "LDT_TYPE"

    def evaluate(self, doc: EulumdatDocument) -> List[ValidationFinding]:
        if doc.type_indicator in (1, 2, 3):
            return []
        return [
            ValidationFinding(
                id=self.id,
                severity="ERROR",
                title="Invalid type indicator",
                message=f"Invalid type indicator: {doc.type_indicator} (expected 1-3)",
            )
        ]
