"""
Reduce a classified ingredient tree to one product-level summary.
Counting is over the flattened list (parents and sub-ingredients alike).
"""
import logging
from typing import List, Optional

from label_core.models.ingredient import ProductIngredient, flatten_ingredients
from label_core.models.status import RiskLevel, SafetyStatus, SourceProvenance
from label_core.models.summary import ProductSafetySummary

logger = logging.getLogger(__name__)

UNKNOWN_MAJORITY_RATIO = 0.5


def _percentage(count: int, total: int) -> int:
    # Half rounds up; each bucket is rounded on its own
    return int(count * 100 / total + 0.5) if total > 0 else 0


def summarize_ingredients(
    ingredients: List[ProductIngredient],
    source_provenance: Optional[SourceProvenance] = None,
) -> ProductSafetySummary:
    """
    overall_status, in order:
    - any unsafe -> unsafe
    - unknown > 50% of total, or any high-risk masking ingredient -> unknown
    - any unknown -> unknown
    - else safe (including the empty list)
    source_provenance defaults to the first ingredient's tag.
    """
    flat = flatten_ingredients(ingredients or [])
    total = len(flat)
    safe = [i for i in flat if i.safety_status == SafetyStatus.SAFE]
    unsafe = [i for i in flat if i.safety_status == SafetyStatus.UNSAFE]
    unknown = [i for i in flat if i.safety_status == SafetyStatus.UNKNOWN]
    masking = [i for i in flat if i.is_masking]

    if unsafe:
        overall = SafetyStatus.UNSAFE
    elif len(unknown) > total * UNKNOWN_MAJORITY_RATIO or any(
        m.masking_risk_level == RiskLevel.HIGH for m in masking
    ):
        overall = SafetyStatus.UNKNOWN
    elif unknown:
        overall = SafetyStatus.UNKNOWN
    else:
        overall = SafetyStatus.SAFE

    if source_provenance is None and ingredients:
        source_provenance = ingredients[0].source_provenance

    if total == 0:
        logger.info("SUMMARY empty ingredient list -> safe (vacuous)")

    return ProductSafetySummary(
        overall_status=overall,
        safe_count=len(safe),
        unsafe_count=len(unsafe),
        unknown_count=len(unknown),
        safe_percentage=_percentage(len(safe), total),
        unsafe_percentage=_percentage(len(unsafe), total),
        unknown_percentage=_percentage(len(unknown), total),
        unsafe_ingredients=tuple(unsafe),
        masking_ingredients=tuple(masking),
        total_ingredients=total,
        source_provenance=source_provenance,
    )


def recalculate_product_safety(ingredients: List[ProductIngredient]) -> ProductSafetySummary:
    """Recompute the summary for a stored ingredient tree."""
    return summarize_ingredients(ingredients)
