"""
Safety classifier. Per ingredient, first hit wins:
1) canonical dictionary entry, 2) first matching rule of an enabled profile, 3) unknown.
Masking detection runs independently on the original text. An unsafe sub-ingredient
upgrades its parent to unsafe; an unsafe parent is never downgraded.
"""
import logging
from typing import List, Optional, Tuple

from label_core.models.ingredient import NormalizationResult, ProductIngredient
from label_core.models.status import SafetyStatus, SourceProvenance
from label_core.reference.reference_data import ReferenceDataSet
from .masking import check_masking

logger = logging.getLogger(__name__)


def _resolve_status(
    result: NormalizationResult,
    data: ReferenceDataSet,
) -> Tuple[SafetyStatus, Optional[str]]:
    canonical = (result.canonical_name or "").lower()
    known = data.get_ingredient(canonical)
    if known is not None:
        return known.safety_status, known.safety_reason

    original = (result.original_text or "").lower()
    for compiled in data.rules:
        try:
            hit = compiled.matches(original, canonical)
        except (TypeError, RuntimeError) as e:
            logger.warning(
                "RULE_PATTERN evaluation failed pattern=%s error=%s; treated as no match",
                compiled.rule.ingredient_pattern, e,
            )
            continue
        if hit:
            return compiled.rule.safety_status, compiled.rule.reason
    return SafetyStatus.UNKNOWN, None


class SafetyClassifier:
    """Pure function of its inputs and the reference snapshot it was built with."""

    def __init__(self, reference_data: ReferenceDataSet):
        self._data = reference_data

    def classify(
        self,
        result: NormalizationResult,
        source_provenance: SourceProvenance = SourceProvenance.API,
    ) -> ProductIngredient:
        status, reason = _resolve_status(result, self._data)
        masking = check_masking(result.original_text, self._data.masking_terms)

        subs = tuple(self.classify(sub, source_provenance) for sub in result.sub_ingredients)
        unsafe_subs = [s for s in subs if s.safety_status == SafetyStatus.UNSAFE]
        if unsafe_subs and status != SafetyStatus.UNSAFE:
            names = ", ".join(s.canonical_name for s in unsafe_subs)
            logger.info(
                "CLASSIFIER propagated_unsafe parent=%s from=%s previous=%s",
                result.canonical_name, names, status.value,
            )
            status = SafetyStatus.UNSAFE
            reason = f"Contains unsafe sub-ingredients: {names}"

        if status == SafetyStatus.UNKNOWN and not subs:
            logger.debug(
                "UNKNOWN_INGREDIENT raw=%s canonical=%s confidence=%.2f",
                result.original_text, result.canonical_name, result.confidence,
            )

        return ProductIngredient(
            original_text=result.original_text,
            normalized_name=result.normalized_name,
            canonical_name=result.canonical_name,
            confidence=result.confidence,
            sub_ingredients=subs,
            safety_status=status,
            safety_reason=reason,
            is_masking=masking.is_masking,
            masking_reason=masking.reason,
            masking_risk_level=masking.risk_level,
            verification_guidance=masking.verification_guidance,
            source_provenance=SourceProvenance(source_provenance),
        )

    def classify_list(
        self,
        results: List[NormalizationResult],
        source_provenance: SourceProvenance = SourceProvenance.API,
    ) -> List[ProductIngredient]:
        return [self.classify(r, source_provenance) for r in results]
