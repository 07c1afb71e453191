from __future__ import annotations

import logging
from typing import Dict, List

from lumio.models.ies import IESDocument, IESFormat
from lumio.models.validation import ValidationFinding, ValidationReport
from lumio.parser.errors import ValidationError
from lumio.parser.keywords import MAX_KEYWORD_LENGTH, REQUIRED_KEYWORDS, is_keyword_allowed
from lumio.validation.defaults import validate_ies
from lumio.validation.rules.ies_rules import RuleFormatKnown

logger = logging.getLogger(__name__)

PLACEHOLDER = "unknown"


def _relocated_name(keyword: str, keywords: Dict[str, str]) -> str:
    # DATE keeps its meaning unless the document already carries an ISSUEDATE
    if keyword == "DATE" and "ISSUEDATE" not in keywords:
        return "ISSUEDATE"
    return "_" + keyword


def upgrade_ies(doc: IESDocument) -> IESDocument:
    """
    Re-tag `doc` as LM-63-2002 in place and return it.

    Missing required keywords get a placeholder value. Keywords the newer
    revision does not know become `_`-prefixed user keywords, except DATE which
    becomes ISSUEDATE when that is still free. An inconsistent document, or one
    with a keyword that cannot be relocated within the 18 character limit or
    without clashing, is rejected untouched.
    """
    # an untagged document is exactly what upgrading fixes
    errors = [f for f in validate_ies(doc).errors if f.id != RuleFormatKnown.id]
    if errors:
        raise ValidationError(ValidationReport(findings=errors))

    target = IESFormat.LM_63_2002

    keywords: Dict[str, str] = {}
    unmovable: List[str] = []
    for keyword, value in doc.keywords.items():
        if is_keyword_allowed(target, keyword):
            keywords[keyword] = value
            continue
        name = _relocated_name(keyword, doc.keywords)
        if len(name) > MAX_KEYWORD_LENGTH or name in doc.keywords:
            unmovable.append(keyword)
            continue
        keywords[name] = value
        logger.debug("keyword %s moved to %s", keyword, name)

    if unmovable:
        raise ValidationError(
            ValidationReport(
                findings=[
                    ValidationFinding(
                        id="IES_KW_RELOCATE",
                        severity="ERROR",
                        title="Keyword cannot be relocated",
                        message=(
                            f"Keywords cannot be relocated without exceeding {MAX_KEYWORD_LENGTH} characters "
                            f"or clashing with an existing keyword: {', '.join(unmovable)}"
                        ),
                        evidence={"keywords": unmovable},
                        suggested_fix="Rename the keywords before upgrading.",
                    )
                ]
            )
        )

    for keyword in sorted(REQUIRED_KEYWORDS[target]):
        keywords.setdefault(keyword, PLACEHOLDER)

    doc.keywords = keywords
    doc.format = target
    return doc
