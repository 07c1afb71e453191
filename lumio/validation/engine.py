from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Protocol

from lumio.models.validation import ValidationFinding, ValidationReport


_SEVERITY_ORDER = {"ERROR": 0, "WARN": 1, "INFO": 2}


class Rule(Protocol):
    id: str
    def evaluate(self, doc: Any) -> List[ValidationFinding]: ...


@dataclass
class Validator:
    rules: List[Rule] = field(default_factory=list)

    def __add__(self, other: "Validator") -> "Validator":
        return Validator(rules=[*self.rules, *other.rules])

    def run(self, doc: Any) -> ValidationReport:
        findings: List[ValidationFinding] = []
        for rule in self.rules:
            findings.extend(rule.evaluate(doc))
        # rules run in registration order; report is ordered by severity only
        findings.sort(key=lambda f: _SEVERITY_ORDER.get(f.severity, 99))
        return ValidationReport(findings=findings)
