"""
Reference-data records: canonical ingredients, masking terms, classification rules.
Immutable once loaded; parsed from and dumped to plain dicts (JSON files, API).
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .status import RiskLevel, SafetyStatus


@dataclass(frozen=True)
class CanonicalIngredient:
    canonical_name: str
    synonyms: tuple = field(default_factory=tuple)
    safety_status: SafetyStatus = SafetyStatus.UNKNOWN
    safety_reason: Optional[str] = None
    evidence: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "canonical_name": self.canonical_name,
            "synonyms": list(self.synonyms),
            "safety_status": self.safety_status.value,
            "safety_reason": self.safety_reason,
            "evidence": self.evidence,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "CanonicalIngredient":
        return cls(
            canonical_name=d["canonical_name"].strip().lower(),
            synonyms=tuple(s.strip().lower() for s in (d.get("synonyms") or []) if s and s.strip()),
            safety_status=SafetyStatus(d.get("safety_status", "unknown")),
            safety_reason=d.get("safety_reason"),
            evidence=d.get("evidence"),
            category=d.get("category"),
        )


@dataclass(frozen=True)
class MaskingTerm:
    """Vague label that can legally hide undisclosed sub-ingredients."""
    term: str
    risk_level: RiskLevel
    reason: str
    verification_guidance: str = ""

    def to_dict(self) -> dict:
        return {
            "term": self.term,
            "risk_level": self.risk_level.value,
            "reason": self.reason,
            "verification_guidance": self.verification_guidance,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "MaskingTerm":
        return cls(
            term=d["term"].strip(),
            risk_level=RiskLevel(d.get("risk_level", "medium")),
            reason=d.get("reason", ""),
            verification_guidance=d.get("verification_guidance", "") or "",
        )


@dataclass(frozen=True)
class ClassificationRule:
    """Regex rule: if ingredient_pattern matches original or canonical text, apply safety_status."""
    ingredient_pattern: str
    safety_status: SafetyStatus
    reason: str
    profile: str
    evidence: Optional[str] = None
    version: int = 1
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "ingredient_pattern": self.ingredient_pattern,
            "safety_status": self.safety_status.value,
            "reason": self.reason,
            "evidence": self.evidence,
            "profile": self.profile,
            "version": self.version,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ClassificationRule":
        created = d.get("created_at")
        if isinstance(created, str):
            created = datetime.fromisoformat(created)
        return cls(
            ingredient_pattern=d["ingredient_pattern"],
            safety_status=SafetyStatus(d.get("safety_status", "unknown")),
            reason=d.get("reason", ""),
            profile=(d.get("profile") or "default").strip().lower(),
            evidence=d.get("evidence"),
            version=int(d.get("version", 1)),
            created_at=created,
        )
