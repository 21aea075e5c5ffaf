"""
Overall normalization confidence for a parsed product.
"""
from typing import List

from label_core.models.ingredient import NormalizationResult


def calculate_overall_confidence(results: List[NormalizationResult]) -> float:
    """Mean confidence over top-level results; 0.0 for an empty list."""
    if not results:
        return 0.0
    return round(sum(r.confidence for r in results) / len(results), 4)
