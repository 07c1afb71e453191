from __future__ import annotations

from lumio.models.eulumdat import EulumdatDocument
from lumio.models.ies import IESDocument
from lumio.models.validation import ValidationReport
from lumio.parser.errors import ValidationError
from lumio.validation.engine import Validator
from lumio.validation.rules.ies_rules import (
    RuleAngleCounts,
    RuleCandelaShape,
    RuleFormatKnown,
    RuleHeaderRanges,
    RuleKeywordsAllowed,
    RuleRequiredKeywords,
    RuleTiltData,
)
from lumio.validation.rules.ldt_rules import (
    RuleAngleArrays,
    RuleDirectRatios,
    RuleFieldWidths,
    RuleIntensityLength,
    RuleLampSetArrays,
    RuleSymmetryIndicator,
    RuleTypeIndicator,
)


def ies_validator(strict: bool = False) -> Validator:
    """Rules run before every IES export; `strict` adds standards checks."""
    base = Validator(
        rules=[
            RuleFormatKnown(),
            RuleRequiredKeywords(),
            RuleAngleCounts(),
            RuleCandelaShape(),
            RuleTiltData(),
        ]
    )
    if not strict:
        return base
    return base + Validator(rules=[RuleKeywordsAllowed(), RuleHeaderRanges()])


def ldt_validator(strict: bool = False) -> Validator:
    base = Validator(
        rules=[
            RuleSymmetryIndicator(),
            RuleLampSetArrays(),
            RuleDirectRatios(),
            RuleAngleArrays(),
            RuleIntensityLength(),
        ]
    )
    if not strict:
        return base
    return base + Validator(rules=[RuleFieldWidths(), RuleTypeIndicator()])


def validate_ies(doc: IESDocument, strict: bool = False) -> ValidationReport:
    return ies_validator(strict).run(doc)


def validate_ldt(doc: EulumdatDocument, strict: bool = False) -> ValidationReport:
    return ldt_validator(strict).run(doc)


def ensure_valid_ies(doc: IESDocument, strict: bool = False) -> None:
    report = validate_ies(doc, strict)
    if not report.ok:
        raise ValidationError(report)


def ensure_valid_ldt(doc: EulumdatDocument, strict: bool = False) -> None:
    report = validate_ldt(doc, strict)
    if not report.ok:
        raise ValidationError(report)
