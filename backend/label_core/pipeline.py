"""
Ingredient pipeline: parse -> normalize -> match -> classify -> summarize.

The pipeline holds one immutable ReferenceDataSet. load()/reload() build a complete new
snapshot and install it with a single assignment, so concurrent classify calls see either
the old or the new tables, never a mix. Calls made before any load raise
ReferenceDataNotLoadedError rather than classifying everything as unknown.
"""
import logging
import threading
from typing import Iterable, List, Optional, Tuple, Union

from label_core.classification.classifier import SafetyClassifier
from label_core.evaluation.aggregator import summarize_ingredients
from label_core.models.ingredient import NormalizationResult, ProductIngredient
from label_core.models.status import SourceProvenance
from label_core.models.summary import ProductSafetySummary
from label_core.normalization.normalizer import normalize_ingredient_text
from label_core.normalization.parser import group_entries, parse_ingredient_list
from label_core.reference.errors import ReferenceDataNotLoadedError
from label_core.reference.provider import ReferenceDataProvider, load_reference_data
from label_core.reference.reference_data import ReferenceDataSet

logger = logging.getLogger(__name__)

ProvenanceLike = Union[SourceProvenance, str]


def coerce_provenance(value: ProvenanceLike) -> SourceProvenance:
    """Accept enum or string tag; raises ValueError on an unknown channel."""
    if isinstance(value, SourceProvenance):
        return value
    return SourceProvenance(str(value).strip().lower())


class IngredientPipeline:
    def __init__(self, reference_data: Optional[ReferenceDataSet] = None):
        self._snapshot: Optional[Tuple[ReferenceDataSet, SafetyClassifier]] = None
        self._reload_lock = threading.Lock()
        if reference_data is not None:
            self.install(reference_data)

    # --- Lifecycle ---
    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    def _require(self) -> Tuple[ReferenceDataSet, SafetyClassifier]:
        snapshot = self._snapshot
        if snapshot is None:
            raise ReferenceDataNotLoadedError()
        return snapshot

    @property
    def reference_data(self) -> ReferenceDataSet:
        return self._require()[0]

    def install(self, reference_data: ReferenceDataSet) -> None:
        """Swap in a fully built snapshot."""
        self._snapshot = (reference_data, SafetyClassifier(reference_data))

    def load(
        self,
        provider: Optional[ReferenceDataProvider] = None,
        enabled_profiles: Optional[Iterable[str]] = None,
    ) -> ReferenceDataSet:
        """Build a new snapshot from provider and install it. Concurrent reloads are serialized."""
        with self._reload_lock:
            data = load_reference_data(provider, enabled_profiles=enabled_profiles)
            self.install(data)
        logger.info(
            "PIPELINE ready version=%s rules=%d warnings=%d",
            data.version, len(data.rules), len(data.load_warnings),
        )
        return data

    reload = load

    # --- Normalization ---
    def normalize_ingredient(self, raw_text: str) -> NormalizationResult:
        data, _ = self._require()
        return self._normalize(raw_text, data)

    @staticmethod
    def _normalize(
        raw_text: str,
        data: ReferenceDataSet,
        sub_ingredients: tuple = (),
    ) -> NormalizationResult:
        normalized = normalize_ingredient_text(raw_text)
        match = data.matcher.match(normalized)
        return NormalizationResult(
            original_text=raw_text,
            normalized_name=normalized,
            canonical_name=match.canonical_name,
            confidence=match.confidence,
            sub_ingredients=sub_ingredients,
        )

    def normalize_ingredients_list(self, raw_text: str) -> List[NormalizationResult]:
        data, _ = self._require()
        return self._normalize_list(raw_text, data)

    def _normalize_list(self, raw_text: str, data: ReferenceDataSet) -> List[NormalizationResult]:
        results: List[NormalizationResult] = []
        for parent, subs in group_entries(parse_ingredient_list(raw_text)):
            children = tuple(self._normalize(s, data) for s in subs)
            results.append(self._normalize(parent, data, children))
        return results

    # --- Classification ---
    def classify_product_ingredients(
        self,
        raw_text: str,
        source_provenance: ProvenanceLike = SourceProvenance.MANUAL,
    ) -> List[ProductIngredient]:
        """Full pipeline for one ingredient-list text. Never raises on malformed text."""
        data, classifier = self._require()
        provenance = coerce_provenance(source_provenance)
        results = self._normalize_list(raw_text or "", data)
        classified = classifier.classify_list(results, provenance)
        logger.info(
            "PIPELINE classified source=%s top_level=%d",
            provenance.value, len(classified),
        )
        return classified

    def summarize(self, ingredients: List[ProductIngredient]) -> ProductSafetySummary:
        return summarize_ingredients(ingredients)

    def analyze(
        self,
        raw_text: str,
        source_provenance: ProvenanceLike = SourceProvenance.MANUAL,
    ) -> Tuple[List[ProductIngredient], ProductSafetySummary]:
        provenance = coerce_provenance(source_provenance)
        ingredients = self.classify_product_ingredients(raw_text, provenance)
        return ingredients, summarize_ingredients(ingredients, provenance)
