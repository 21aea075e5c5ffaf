"""
Shared fixtures: a small in-memory reference data set and a pipeline over the repo data files.
"""
import pytest

from label_core.models.reference import CanonicalIngredient, ClassificationRule, MaskingTerm
from label_core.models.status import RiskLevel, SafetyStatus


def make_ingredients():
    return [
        CanonicalIngredient("folic acid", ("folacin", "vitamin b9"), SafetyStatus.UNSAFE, "Synthetic folate."),
        CanonicalIngredient("methylfolate", ("5-mthf", "l-methylfolate"), SafetyStatus.SAFE, "Active folate."),
        CanonicalIngredient("water", ("purified water", "aqua"), SafetyStatus.SAFE, "Water."),
        CanonicalIngredient("salt", ("sea salt", "sodium chloride"), SafetyStatus.SAFE, "Salt."),
        CanonicalIngredient("sugar", ("cane sugar", "sucrose"), SafetyStatus.SAFE, "Sugar."),
        CanonicalIngredient("riboflavin", ("vitamin b2",), SafetyStatus.SAFE, "B2."),
        CanonicalIngredient("carrageenan", ("e407",), SafetyStatus.UNKNOWN, "May inflame the gut."),
    ]


def make_masking_terms():
    return [
        MaskingTerm("natural flavors", RiskLevel.HIGH, "Hides undisclosed components.", "Ask the manufacturer."),
        MaskingTerm("spices", RiskLevel.MEDIUM, "Spices are not itemised.", "Ask for a breakdown."),
        MaskingTerm("enzymes", RiskLevel.LOW, "Enzyme source unknown."),
    ]


def make_rules():
    return [
        ClassificationRule("enriched|fortified", SafetyStatus.UNSAFE, "Fortified with folic acid.", "mthfr"),
        ClassificationRule("cyanocobalamin", SafetyStatus.UNSAFE, "Synthetic B12.", "mthfr"),
        ClassificationRule("wheat|gluten", SafetyStatus.UNKNOWN, "Common allergen.", "allergens"),
        ClassificationRule("titanium dioxide|e171", SafetyStatus.UNSAFE, "Banned in the EU.", "eu_standards", version=2),
    ]


@pytest.fixture
def reference_data():
    from label_core.reference.reference_data import ReferenceDataSet
    return ReferenceDataSet.build(make_ingredients(), make_masking_terms(), make_rules())


@pytest.fixture
def pipeline(reference_data):
    from label_core.pipeline import IngredientPipeline
    return IngredientPipeline(reference_data)


@pytest.fixture
def default_pipeline():
    """Pipeline over data/*.json with every profile enabled."""
    from label_core.config import get_canonical_ingredients_path
    from label_core.pipeline import IngredientPipeline
    if not get_canonical_ingredients_path().exists():
        pytest.skip("data/canonical_ingredients.json not found")
    p = IngredientPipeline()
    p.load(enabled_profiles=["mthfr", "eu_standards", "genetic_mutations", "allergens", "additives"])
    return p
