from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Union

from lumio.models.eulumdat import EulumdatDocument
from lumio.models.ies import IESDocument
from lumio.models.validation import ValidationReport
from lumio.parser.ies_parser import parse_ies_file
from lumio.parser.ldt_parser import parse_ldt_file
from lumio.parser.line_reader import ParseNote
from lumio.validation.defaults import validate_ies, validate_ldt


SourceFormat = Literal["IES", "LDT"]


@dataclass(frozen=True)
class LoadResult:
    kind: SourceFormat
    doc: Union[IESDocument, EulumdatDocument]
    report: ValidationReport
    notes: List[ParseNote] = field(default_factory=list)


def detect_kind(path: str | Path) -> SourceFormat:
    suffix = Path(path).suffix.lower()
    if suffix == ".ies":
        return "IES"
    if suffix in (".ldt", ".eul"):
        return "LDT"
    raise ValueError(f"Cannot tell photometric format from extension: {path}")


def load_photometry(path: str | Path, strict: bool = False) -> LoadResult:
    """Parse an .ies or .ldt file and run the matching validator on it."""
    kind = detect_kind(path)
    notes: List[ParseNote] = []
    if kind == "IES":
        ies = parse_ies_file(path, strict=strict, notes=notes)
        return LoadResult(kind=kind, doc=ies, report=validate_ies(ies, strict), notes=notes)
    ldt = parse_ldt_file(path, strict=strict, notes=notes)
    return LoadResult(kind=kind, doc=ldt, report=validate_ldt(ldt, strict), notes=notes)
