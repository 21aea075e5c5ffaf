from .status import SafetyStatus, RiskLevel, SourceProvenance
from .reference import CanonicalIngredient, MaskingTerm, ClassificationRule
from .ingredient import NormalizationResult, ProductIngredient, flatten_ingredients
from .summary import ProductSafetySummary

__all__ = [
    "SafetyStatus",
    "RiskLevel",
    "SourceProvenance",
    "CanonicalIngredient",
    "MaskingTerm",
    "ClassificationRule",
    "NormalizationResult",
    "ProductIngredient",
    "flatten_ingredients",
    "ProductSafetySummary",
]
