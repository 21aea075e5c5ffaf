"""
Reference-data providers. The core only needs a bulk read of the three record sets;
storage and sync belong to the surrounding application.
"""
import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from label_core.config import (
    get_canonical_ingredients_path,
    get_classification_rules_path,
    get_enabled_profiles,
    get_masking_terms_path,
)
from label_core.models.reference import CanonicalIngredient, ClassificationRule, MaskingTerm
from .errors import ReferenceDataError
from .reference_data import ReferenceDataSet

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReferenceDataProvider:
    """Supplies the current full set of reference records."""

    def __init__(self):
        self.warnings: List[str] = []

    def load_canonical_ingredients(self) -> List[CanonicalIngredient]:
        raise NotImplementedError

    def load_masking_terms(self) -> List[MaskingTerm]:
        raise NotImplementedError

    def load_classification_rules(self) -> List[ClassificationRule]:
        raise NotImplementedError


class InMemoryReferenceDataProvider(ReferenceDataProvider):
    def __init__(
        self,
        ingredients: Iterable[CanonicalIngredient] = (),
        masking_terms: Iterable[MaskingTerm] = (),
        rules: Iterable[ClassificationRule] = (),
    ):
        super().__init__()
        self._ingredients = list(ingredients)
        self._masking_terms = list(masking_terms)
        self._rules = list(rules)

    def load_canonical_ingredients(self) -> List[CanonicalIngredient]:
        return list(self._ingredients)

    def load_masking_terms(self) -> List[MaskingTerm]:
        return list(self._masking_terms)

    def load_classification_rules(self) -> List[ClassificationRule]:
        return list(self._rules)


class JsonReferenceDataProvider(ReferenceDataProvider):
    """
    Reads data/canonical_ingredients.json, data/masking_terms.json, data/classification_rules.json.
    A missing or unreadable file raises ReferenceDataError; a bad record is skipped with a warning.
    """

    def __init__(
        self,
        ingredients_path: Optional[Path] = None,
        masking_terms_path: Optional[Path] = None,
        rules_path: Optional[Path] = None,
    ):
        super().__init__()
        self._ingredients_path = ingredients_path or get_canonical_ingredients_path()
        self._masking_terms_path = masking_terms_path or get_masking_terms_path()
        self._rules_path = rules_path or get_classification_rules_path()

    def _read(self, path: Path, key: str) -> List[dict]:
        if not path.exists():
            raise ReferenceDataError(f"Reference data file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ReferenceDataError(f"Could not read {path}: {e}") from e
        items = data.get(key) if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ReferenceDataError(f"{path} has no '{key}' list")
        return items

    def _parse(self, items: List[dict], parse: Callable[[dict], T], path: Path) -> List[T]:
        out: List[T] = []
        for idx, item in enumerate(items):
            try:
                out.append(parse(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                msg = f"{path.name}[{idx}] skipped: {type(e).__name__}: {e}"
                self.warnings.append(msg)
                logger.warning("REFERENCE_DATA record %s", msg)
        logger.info("REFERENCE_DATA read %d/%d records from %s", len(out), len(items), path)
        return out

    def load_canonical_ingredients(self) -> List[CanonicalIngredient]:
        items = self._read(self._ingredients_path, "ingredients")
        return self._parse(items, CanonicalIngredient.from_dict, self._ingredients_path)

    def load_masking_terms(self) -> List[MaskingTerm]:
        items = self._read(self._masking_terms_path, "masking_terms")
        return self._parse(items, MaskingTerm.from_dict, self._masking_terms_path)

    def load_classification_rules(self) -> List[ClassificationRule]:
        items = self._read(self._rules_path, "rules")
        return self._parse(items, ClassificationRule.from_dict, self._rules_path)


def load_reference_data(
    provider: Optional[ReferenceDataProvider] = None,
    enabled_profiles: Optional[Iterable[str]] = None,
) -> ReferenceDataSet:
    """
    Bulk-read all records from provider (default: JSON files from config) and build a snapshot.
    enabled_profiles defaults to the ENABLED_PROFILES setting.
    """
    provider = provider or JsonReferenceDataProvider()
    provider.warnings = []
    if enabled_profiles is None:
        enabled_profiles = get_enabled_profiles()
    data = ReferenceDataSet.build(
        provider.load_canonical_ingredients(),
        provider.load_masking_terms(),
        provider.load_classification_rules(),
        enabled_profiles=enabled_profiles,
    )
    if provider.warnings:
        data = dataclasses.replace(data, load_warnings=tuple(provider.warnings) + data.load_warnings)
    return data
