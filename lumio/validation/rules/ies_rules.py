"""
Consistency rules for IES documents.

The base rules guard export: declared counts must match the collected
sequences and the revision's required keywords must be present. The strict
rules add standards checks that parsing alone does not enforce on documents
built or edited in code.
"""

from __future__ import annotations

from typing import List

from lumio.models.ies import IESDocument, IESFormat, IESTilt
from lumio.models.validation import ValidationFinding
from lumio.parser.keywords import is_keyword_allowed, missing_required_keywords


def _mismatch(rule_id: str, name: str, declared: int, actual: int) -> ValidationFinding:
    return ValidationFinding(
        id=rule_id,
        severity="ERROR",
        title=f"{name} length mismatch",
        message=f"{name} length mismatch: declared {declared}, found {actual}",
        evidence={"array": name, "declared": declared, "actual": actual},
    )


class RuleFormatKnown:
    id = "IES_FMT_UNKNOWN"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        if doc.format != IESFormat.UNKNOWN:
            return []
        return [
            ValidationFinding(
                id=self.id,
                severity="ERROR",
                title="Unknown format",
                message="Document has no LM-63 revision; line budgets cannot be applied.",
                suggested_fix="Set the format or run upgrade().",
            )
        ]


class RuleRequiredKeywords:
    id = "IES_KW_REQUIRED"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        missing = missing_required_keywords(doc.format, doc.keywords)
        if not missing:
            return []
        return [
            ValidationFinding(
                id=self.id,
                severity="ERROR",
                title="Required keywords not present",
                message=f"Required keywords not present: {', '.join(sorted(missing))}",
                evidence={"missing": sorted(missing), "format": doc.format.value},
                suggested_fix="Add the keywords or run upgrade() to synthesize placeholders.",
            )
        ]


class RuleAngleCounts:
    id = "IES_ANG_COUNT"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        out: List[ValidationFinding] = []
        if doc.num_vertical_angles != len(doc.vertical_angles):
            out.append(_mismatch(self.id, "VerticalAngles", doc.num_vertical_angles, len(doc.vertical_angles)))
        if doc.num_horizontal_angles != len(doc.horizontal_angles):
            out.append(_mismatch(self.id, "HorizontalAngles", doc.num_horizontal_angles, len(doc.horizontal_angles)))
        return out


class RuleCandelaShape:
    id = "IES_CDL_SHAPE"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        if doc.num_horizontal_angles != len(doc.candela_values):
            return [
                _mismatch(self.id, "CandelaValues horizontal", doc.num_horizontal_angles, len(doc.candela_values))
            ]
        for row in doc.candela_values:
            if doc.num_vertical_angles != len(row):
                return [_mismatch(self.id, "CandelaValues vertical", doc.num_vertical_angles, len(row))]
        return []


class RuleTiltData:
    id = "IES_TILT"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        if doc.tilt == IESTilt.FILE:
            return [
                ValidationFinding(
                    id=self.id,
                    severity="ERROR",
                    title="TILT file not supported",
                    message="TILT data from an external file cannot be written.",
                )
            ]
        if doc.tilt != IESTilt.INCLUDE:
            return []
        out: List[ValidationFinding] = []
        if doc.tilt_count != len(doc.tilt_angles):
            out.append(_mismatch(self.id, "TiltAngles", doc.tilt_count, len(doc.tilt_angles)))
        if doc.tilt_count != len(doc.tilt_factors):
            out.append(_mismatch(self.id, "TiltMultiplierFactors", doc.tilt_count, len(doc.tilt_factors)))
        return out


class RuleKeywordsAllowed:
    id = "IES_KW_ALLOWED"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        bad = [k for k in doc.keywords if not is_keyword_allowed(doc.format, k)]
        if not bad:
            return []
        return [
            ValidationFinding(
                id=self.id,
                severity="ERROR",
                title="Keywords not allowed",
                message=f"Keywords not allowed for {doc.format.value}: {', '.join(bad)}",
                evidence={"keywords": bad},
                suggested_fix="Prefix user keywords with '_' or run upgrade().",
            )
        ]


class RuleHeaderRanges:
    id = "IES_HDR_RANGE"

    def evaluate(self, doc: IESDocument) -> List[ValidationFinding]:
        problems = []
        if doc.photometric_type not in (1, 2, 3):
            problems.append(f"photometric_type={doc.photometric_type} (expected 1,2,3)")
        if doc.units_type not in (1, 2):
            problems.append(f"units_type={doc.units_type} (expected 1=feet,2=meters)")
        if doc.tilt == IESTilt.INCLUDE and doc.tilt_lamp_to_luminaire_geometry not in (1, 2, 3):
            problems.append(f"lamp_to_luminaire_geometry={doc.tilt_lamp_to_luminaire_geometry} (expected 1,2,3)")
        return [
            ValidationFinding(
                id=self.id,
                severity="ERROR",
                title="Header value out of range",
                message=p,
            )
            for p in problems
        ]
