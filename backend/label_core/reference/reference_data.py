"""
Immutable reference-data snapshot: canonical dictionary, masking terms, compiled rules,
and the fuzzy matcher built over them. Built once by ReferenceDataSet.build(); a reload
builds a new snapshot and swaps it in, never mutating one that readers may hold.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from label_core.matching.matcher import CanonicalMatcher
from label_core.models.reference import CanonicalIngredient, ClassificationRule, MaskingTerm
from label_core.normalization.normalizer import normalize_ingredient_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledRule:
    rule: ClassificationRule
    pattern: "re.Pattern[str]"

    def matches(self, *texts: str) -> bool:
        return any(t and self.pattern.search(t) for t in texts)


@dataclass(frozen=True)
class ReferenceDataSet:
    ingredients_by_key: Dict[str, CanonicalIngredient]
    ingredients: Tuple[CanonicalIngredient, ...]
    masking_terms: Tuple[MaskingTerm, ...]
    rules: Tuple[CompiledRule, ...]
    matcher: CanonicalMatcher
    enabled_profiles: Optional[frozenset] = None
    version: int = 0
    load_warnings: Tuple[str, ...] = field(default_factory=tuple)

    def get_ingredient(self, name: str) -> Optional[CanonicalIngredient]:
        """Case-insensitive lookup by canonical name or synonym."""
        if not name:
            return None
        return self.ingredients_by_key.get(name.lower())

    @property
    def profiles(self) -> List[str]:
        return sorted({r.rule.profile for r in self.rules})

    @classmethod
    def build(
        cls,
        ingredients: Iterable[CanonicalIngredient],
        masking_terms: Iterable[MaskingTerm],
        rules: Iterable[ClassificationRule],
        enabled_profiles: Optional[Iterable[str]] = None,
    ) -> "ReferenceDataSet":
        """
        Validate and index the records.
        - Each surface form (canonical name or synonym, raw lower-case and normalized) maps to
          exactly one ingredient; a later claim on an owned form is dropped with a warning.
        - Rule patterns are compiled case-insensitively; invalid patterns are dropped with a warning.
        - Rules whose profile is not in enabled_profiles are excluded (None = all profiles).
        """
        warnings: List[str] = []
        profiles = (
            frozenset(p.strip().lower() for p in enabled_profiles)
            if enabled_profiles is not None else None
        )

        by_key: Dict[str, CanonicalIngredient] = {}
        exact: Dict[str, str] = {}
        fuzzy: List[Tuple[str, str]] = []
        kept: List[CanonicalIngredient] = []
        seen_names: set = set()
        for ing in ingredients:
            if ing.canonical_name in exact and exact[ing.canonical_name] != ing.canonical_name:
                msg = f"canonical name '{ing.canonical_name}' already a synonym of '{exact[ing.canonical_name]}'"
                warnings.append(msg)
                logger.warning("REFERENCE_DATA duplicate %s; skipped", msg)
                continue
            if ing.canonical_name in seen_names:
                msg = f"duplicate canonical ingredient '{ing.canonical_name}'"
                warnings.append(msg)
                logger.warning("REFERENCE_DATA %s; skipped", msg)
                continue
            kept.append(ing)
            seen_names.add(ing.canonical_name)
            for surface in (ing.canonical_name,) + tuple(ing.synonyms):
                keys = {surface.lower(), normalize_ingredient_text(surface)}
                claimed = False
                for key in keys:
                    if not key:
                        continue
                    owner = exact.get(key)
                    if owner is not None and owner != ing.canonical_name:
                        msg = f"synonym '{surface}' of '{ing.canonical_name}' already maps to '{owner}'"
                        warnings.append(msg)
                        logger.warning("REFERENCE_DATA duplicate %s; skipped", msg)
                        continue
                    exact[key] = ing.canonical_name
                    by_key[key] = ing
                    claimed = True
                search_key = normalize_ingredient_text(surface)
                if claimed and search_key:
                    fuzzy.append((search_key, ing.canonical_name))

        compiled: List[CompiledRule] = []
        version = 0
        for rule in rules:
            if profiles is not None and rule.profile not in profiles:
                continue
            try:
                pattern = re.compile(rule.ingredient_pattern, re.IGNORECASE)
            except re.error as e:
                msg = f"invalid pattern {rule.ingredient_pattern!r} (profile={rule.profile}): {e}"
                warnings.append(msg)
                logger.warning("RULE_PATTERN %s; rule excluded", msg)
                continue
            compiled.append(CompiledRule(rule=rule, pattern=pattern))
            version = max(version, rule.version)

        terms = tuple(t for t in masking_terms if t.term)

        data = cls(
            ingredients_by_key=by_key,
            ingredients=tuple(kept),
            masking_terms=terms,
            rules=tuple(compiled),
            matcher=CanonicalMatcher(exact, fuzzy),
            enabled_profiles=profiles,
            version=version,
            load_warnings=tuple(warnings),
        )
        logger.info(
            "REFERENCE_DATA loaded ingredients=%d keys=%d masking_terms=%d rules=%d profiles=%s warnings=%d",
            len(kept), len(by_key), len(terms), len(compiled),
            sorted(profiles) if profiles is not None else "all", len(warnings),
        )
        return data
