"""
Product processing: ingredient text (from lookup, OCR or manual entry) -> classified
ingredients + safety summary. Storage is the caller's concern.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from label_core.evaluation.confidence import calculate_overall_confidence
from label_core.external_apis.base import ProductRecord
from label_core.external_apis.fetcher import demo_product, lookup_product_by_upc
from label_core.external_apis.upc import normalize_upc
from label_core.models.ingredient import ProductIngredient
from label_core.models.status import SourceProvenance
from label_core.models.summary import ProductSafetySummary
from label_core.pipeline import IngredientPipeline, ProvenanceLike, coerce_provenance

logger = logging.getLogger(__name__)


@dataclass
class ProcessProductResult:
    success: bool
    source: SourceProvenance
    product: Optional[ProductRecord] = None
    ingredients: List[ProductIngredient] = field(default_factory=list)
    safety: Optional[ProductSafetySummary] = None
    normalization_confidence: float = 0.0
    error: Optional[str] = None
    not_found: bool = False
    searched_apis: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "source": self.source.value,
            "product": self.product.to_dict() if self.product else None,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "safety": self.safety.to_dict() if self.safety else None,
            "normalization_confidence": self.normalization_confidence,
            "error": self.error,
            "not_found": self.not_found,
            "searched_apis": list(self.searched_apis),
        }


def process_product_from_text(
    pipeline: IngredientPipeline,
    product: ProductRecord,
    source: ProvenanceLike = SourceProvenance.MANUAL,
) -> ProcessProductResult:
    """Classify product.ingredients_text. Raises ReferenceDataNotLoadedError if the pipeline is not ready."""
    provenance = coerce_provenance(source)
    text = product.ingredients_text or ""
    ingredients, summary = pipeline.analyze(text, provenance)
    # Top-level confidences from the same pass as the classification
    confidence = calculate_overall_confidence(ingredients)
    logger.info(
        "PRODUCT processed upc=%s source=%s overall=%s total=%d confidence=%.2f",
        product.upc, provenance.value, summary.overall_status.value,
        summary.total_ingredients, confidence,
    )
    return ProcessProductResult(
        success=True,
        source=provenance,
        product=product,
        ingredients=ingredients,
        safety=summary,
        normalization_confidence=confidence,
    )


def process_product_by_upc(
    pipeline: IngredientPipeline,
    upc: str,
    use_demo_on_fail: bool = False,
) -> ProcessProductResult:
    """Look the product up by UPC and classify its ingredients (provenance 'api')."""
    lookup = lookup_product_by_upc(upc)
    if lookup.success and lookup.product is not None:
        result = process_product_from_text(pipeline, lookup.product, SourceProvenance.API)
        result.searched_apis = lookup.searched_apis
        return result
    if use_demo_on_fail:
        logger.info("PRODUCT lookup failed upc=%s; using demo product", upc)
        result = process_product_from_text(pipeline, demo_product(normalize_upc(upc)), SourceProvenance.MANUAL)
        result.searched_apis = lookup.searched_apis
        return result
    return ProcessProductResult(
        success=False,
        source=SourceProvenance.API,
        error=lookup.error or "Product not found",
        not_found=True,
        searched_apis=lookup.searched_apis,
    )
