"""
lumio validation

Count/length consistency checks run before every export, plus the stricter
standards checks used by `strict=True`.
"""

from lumio.validation.engine import Validator, Rule
from lumio.validation.defaults import (
    ensure_valid_ies,
    ensure_valid_ldt,
    ies_validator,
    ldt_validator,
    validate_ies,
    validate_ldt,
)
from lumio.models.validation import ValidationFinding, ValidationReport

__all__ = [
    "Validator",
    "Rule",
    "ValidationFinding",
    "ValidationReport",
    "ies_validator",
    "ldt_validator",
    "validate_ies",
    "validate_ldt",
    "ensure_valid_ies",
    "ensure_valid_ldt",
]
