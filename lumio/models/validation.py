from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional


Severity = Literal["ERROR", "WARN", "INFO"]


@dataclass(frozen=True)
class ValidationFinding:
    """One consistency problem; `evidence["array"]` names the disagreeing sequence when there is one."""
    id: str
    severity: Severity
    title: str
    message: str
    evidence: Dict[str, Any] = field(default_factory=dict)
    suggested_fix: Optional[str] = None


@dataclass(frozen=True)
class ValidationReport:
    findings: List[ValidationFinding]

    @property
    def errors(self) -> List[ValidationFinding]:
        return [f for f in self.findings if f.severity == "ERROR"]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def summary(self) -> Dict[str, int]:
        counts = Counter(f.severity for f in self.findings)
        return {"errors": counts["ERROR"], "warnings": counts["WARN"], "info": counts["INFO"]}
