"""
Per-request ingredient results. A product's ingredients form a tree of depth <= 2:
top-level entries plus one flat level of sub-ingredients from a breakdown group.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .status import RiskLevel, SafetyStatus, SourceProvenance


@dataclass(frozen=True)
class NormalizationResult:
    original_text: str
    normalized_name: str
    canonical_name: str
    confidence: float
    sub_ingredients: tuple = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_text": self.original_text,
            "normalized_name": self.normalized_name,
            "canonical_name": self.canonical_name,
            "confidence": self.confidence,
            "sub_ingredients": [s.to_dict() for s in self.sub_ingredients],
        }


@dataclass(frozen=True)
class ProductIngredient(NormalizationResult):
    """Classified ingredient. Reclassification builds a new tree; instances are never mutated."""
    safety_status: SafetyStatus = SafetyStatus.UNKNOWN
    safety_reason: Optional[str] = None
    is_masking: bool = False
    masking_reason: Optional[str] = None
    masking_risk_level: Optional[RiskLevel] = None
    verification_guidance: Optional[str] = None
    source_provenance: SourceProvenance = SourceProvenance.MANUAL

    def iter_flat(self) -> Iterator["ProductIngredient"]:
        """Self, then every sub-ingredient depth-first."""
        yield self
        for sub in self.sub_ingredients:
            yield from sub.iter_flat()

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "safety_status": self.safety_status.value,
            "safety_reason": self.safety_reason,
            "is_masking": self.is_masking,
            "masking_reason": self.masking_reason,
            "masking_risk_level": self.masking_risk_level.value if self.masking_risk_level else None,
            "verification_guidance": self.verification_guidance,
            "source_provenance": self.source_provenance.value,
        })
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "ProductIngredient":
        risk = d.get("masking_risk_level")
        return cls(
            original_text=d["original_text"],
            normalized_name=d.get("normalized_name", ""),
            canonical_name=d.get("canonical_name", ""),
            confidence=float(d.get("confidence", 0.0)),
            sub_ingredients=tuple(cls.from_dict(s) for s in (d.get("sub_ingredients") or [])),
            safety_status=SafetyStatus(d.get("safety_status", "unknown")),
            safety_reason=d.get("safety_reason"),
            is_masking=bool(d.get("is_masking", False)),
            masking_reason=d.get("masking_reason"),
            masking_risk_level=RiskLevel(risk) if risk else None,
            verification_guidance=d.get("verification_guidance"),
            source_provenance=SourceProvenance(d.get("source_provenance", "manual")),
        )


def flatten_ingredients(ingredients: List[ProductIngredient]) -> List[ProductIngredient]:
    """Parent then its sub-ingredients, depth-first, order preserved."""
    out: List[ProductIngredient] = []
    for ing in ingredients:
        out.extend(ing.iter_flat())
    return out
