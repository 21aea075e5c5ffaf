"""
Product-level safety summary. Derived from a ProductIngredient list; never stored on its own.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .status import SafetyStatus, SourceProvenance


@dataclass(frozen=True)
class ProductSafetySummary:
    overall_status: SafetyStatus
    safe_count: int = 0
    unsafe_count: int = 0
    unknown_count: int = 0
    # Independently rounded per bucket; the three need not sum to 100.
    safe_percentage: int = 0
    unsafe_percentage: int = 0
    unknown_percentage: int = 0
    unsafe_ingredients: tuple = field(default_factory=tuple)
    masking_ingredients: tuple = field(default_factory=tuple)
    total_ingredients: int = 0
    source_provenance: Optional[SourceProvenance] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_status": self.overall_status.value,
            "safe_count": self.safe_count,
            "unsafe_count": self.unsafe_count,
            "unknown_count": self.unknown_count,
            "safe_percentage": self.safe_percentage,
            "unsafe_percentage": self.unsafe_percentage,
            "unknown_percentage": self.unknown_percentage,
            "unsafe_ingredients": [i.to_dict() for i in self.unsafe_ingredients],
            "masking_ingredients": [i.to_dict() for i in self.masking_ingredients],
            "total_ingredients": self.total_ingredients,
            "source_provenance": self.source_provenance.value if self.source_provenance else None,
        }
