from __future__ import annotations

from typing import Dict, FrozenSet, Mapping, Optional

from lumio.models.ies import IESFormat


MAX_KEYWORD_LENGTH = 18
FORMAT_LINE_MAX_LENGTH = 16
LINE_TERMINATOR = "\r\n"

FORMAT_TOKENS: Dict[str, IESFormat] = {
    "IESNA91": IESFormat.LM_63_1991,
    "IESNA:LM-63-1995": IESFormat.LM_63_1995,
    "IESNA:LM-63-2002": IESFormat.LM_63_2002,
}

# 1986 files have no identifier line at all
FORMAT_LINES: Dict[IESFormat, str] = {
    IESFormat.LM_63_1986: "",
    IESFormat.LM_63_1991: "IESNA91",
    IESFormat.LM_63_1995: "IESNA:LM-63-1995",
    IESFormat.LM_63_2002: "IESNA:LM-63-2002",
}

_KEYWORDS_1991 = frozenset({
    "TEST", "DATE", "MANUFAC", "LUMCAT", "LUMINAIRE", "LAMPCAT", "LAMP",
    "BALLAST", "BALLASTCAT", "MAINTCAT", "DISTRIBUTION", "FLASHAREA",
    "COLORCONSTANT", "MORE",
})

_KEYWORDS_1995 = frozenset({
    "TEST", "DATE", "NEARFIELD", "MANUFAC", "LUMCAT", "LUMINAIRE", "LAMPCAT",
    "LAMP", "BALLAST", "BALLASTCAT", "MAINTCAT", "DISTRIBUTION", "FLASHAREA",
    "COLORCONSTANT", "OTHER", "SEARCH", "MORE", "BLOCK", "ENDBLOCK",
})

_KEYWORDS_2002 = frozenset({
    "TEST", "TESTLAB", "TESTDATE", "NEARFIELD", "MANUFAC", "LUMCAT", "LUMINAIRE",
    "LAMPCAT", "LAMP", "BALLAST", "BALLASTCAT", "MAINTCAT", "DISTRIBUTION",
    "FLASHAREA", "COLORCONSTANT", "LAMPPOSITION", "ISSUEDATE", "OTHER", "SEARCH",
    "MORE",
})

# None: every keyword accepted
ALLOWED_KEYWORDS: Mapping[IESFormat, Optional[FrozenSet[str]]] = {
    IESFormat.UNKNOWN: None,
    IESFormat.LM_63_1986: None,
    IESFormat.LM_63_1991: _KEYWORDS_1991,
    IESFormat.LM_63_1995: _KEYWORDS_1995,
    IESFormat.LM_63_2002: _KEYWORDS_2002,
}

REQUIRED_KEYWORDS: Mapping[IESFormat, FrozenSet[str]] = {
    IESFormat.UNKNOWN: frozenset(),
    IESFormat.LM_63_1986: frozenset(),
    IESFormat.LM_63_1991: frozenset({"TEST", "MANUFAC"}),
    IESFormat.LM_63_1995: frozenset(),
    IESFormat.LM_63_2002: frozenset({"TEST", "TESTLAB", "ISSUEDATE", "MANUFAC"}),
}

# Budgets include the two byte line terminator.
_KEYWORD_LINE_BYTES = {
    IESFormat.LM_63_1986: 82,
    IESFormat.LM_63_1991: 82,
    IESFormat.LM_63_1995: 82,
    IESFormat.LM_63_2002: 256,
}
_DATA_LINE_BYTES = {
    IESFormat.LM_63_1986: 132,
    IESFormat.LM_63_1991: 132,
    IESFormat.LM_63_1995: 132,
    IESFormat.LM_63_2002: 256,
}

# EULUMDAT text field widths
LDT_FIELD_WIDTHS: Dict[str, int] = {
    "company": 78,
    "report_number": 78,
    "luminaire_name": 78,
    "luminaire_number": 78,
    "filename": 8,
    "date_user": 78,
    "lamp_types": 24,
    "color_temperatures": 16,
    "color_rendering": 6,
}


def keyword_line_budget(fmt: IESFormat) -> int:
    """Maximum keyword line length without terminator; 0 for an unknown format."""
    total = _KEYWORD_LINE_BYTES.get(fmt)
    return total - len(LINE_TERMINATOR) if total else 0


def data_line_budget(fmt: IESFormat) -> int:
    total = _DATA_LINE_BYTES.get(fmt)
    return total - len(LINE_TERMINATOR) if total else 0


def is_keyword_allowed(fmt: IESFormat, keyword: str) -> bool:
    if not keyword or len(keyword) > MAX_KEYWORD_LENGTH:
        return False
    allowed = ALLOWED_KEYWORDS.get(fmt)
    if allowed is None:
        return True
    if keyword.startswith("_"):
        return True
    return keyword in allowed


def missing_required_keywords(fmt: IESFormat, keywords: Mapping[str, str]) -> FrozenSet[str]:
    return frozenset(k for k in REQUIRED_KEYWORDS.get(fmt, frozenset()) if k not in keywords)


def encoded_length(text: str, encoding: str = "utf-8") -> int:
    """Byte length of `text` once written; line budgets are byte counts."""
    return len(text.encode(encoding, errors="replace"))
