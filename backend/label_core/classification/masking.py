"""
Masking detection: vague labels (e.g. "natural flavors") that may hide undisclosed
ingredients. Checked against the raw ingredient text, independent of canonicalization.
"""
import re
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from label_core.models.reference import MaskingTerm
from label_core.models.status import RiskLevel

logger = logging.getLogger(__name__)

# Priority order; first match wins.
VAGUE_PHRASES = [
    (re.compile(r"and/or", re.IGNORECASE), "Ingredient composition is variable and unspecified"),
    (re.compile(r"one or more of", re.IGNORECASE), "Multiple possible ingredients, exact composition unknown"),
    (re.compile(r"may contain", re.IGNORECASE), "Potential cross-contamination or variable formulation"),
    (re.compile(r"less than \d+%", re.IGNORECASE), "Minor ingredients may not be fully disclosed"),
]


@dataclass(frozen=True)
class MaskingCheck:
    is_masking: bool
    reason: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    verification_guidance: Optional[str] = None


NOT_MASKING = MaskingCheck(is_masking=False)


def check_masking(text: str, masking_terms: Iterable[MaskingTerm]) -> MaskingCheck:
    """
    1. First masking term found as a case-insensitive substring of text.
    2. Else first vague phrase pattern (risk medium, generic reason).
    """
    if not text:
        return NOT_MASKING
    lower = text.lower()
    for term in masking_terms:
        if term.term.lower() in lower:
            return MaskingCheck(
                is_masking=True,
                reason=term.reason,
                risk_level=term.risk_level,
                verification_guidance=term.verification_guidance or None,
            )
    for pattern, reason in VAGUE_PHRASES:
        if pattern.search(text):
            return MaskingCheck(is_masking=True, reason=reason, risk_level=RiskLevel.MEDIUM)
    return NOT_MASKING
