"""
Unit tests: normalize_ingredient_text, parse_ingredient_list, group_entries.
Run from backend: python -m pytest tests/test_parser_and_normalizer.py -v
"""
import pytest

from label_core.normalization.normalizer import normalize_ingredient_text
from label_core.normalization.parser import (
    SUB_ENTRY_PREFIX,
    group_entries,
    is_sub_entry,
    parse_ingredient_list,
)


def test_normalize_lowercase_and_trim():
    """Case folding and whitespace trimming."""
    assert normalize_ingredient_text("WATER") == "water"
    assert normalize_ingredient_text("Folic Acid") == "folic acid"
    assert normalize_ingredient_text("  sugar  ") == "sugar"


def test_normalize_keeps_hyphen_and_apostrophe():
    """Hyphens and apostrophes survive; other punctuation becomes a space."""
    assert normalize_ingredient_text("vitamin B-12") == "vitamin b-12"
    assert normalize_ingredient_text("confectioner's glaze") == "confectioner's glaze"
    assert normalize_ingredient_text("salt*, (sea)") == "salt sea"
    assert normalize_ingredient_text("snake_case") == "snake case"


def test_normalize_removes_quantities():
    """Quantity/unit annotations are removed anywhere in the string."""
    assert normalize_ingredient_text("vitamin C 500mg") == "vitamin c"
    assert normalize_ingredient_text("sugar 5%") == "sugar"
    assert normalize_ingredient_text("Vitamin D 400 IU daily") == "vitamin d daily"
    assert normalize_ingredient_text("niacin 1.5 mg") == "niacin"
    assert normalize_ingredient_text("2 mcg methylcobalamin") == "methylcobalamin"


def test_normalize_unit_needs_word_boundary():
    """'2 garlic' is not a quantity of grams."""
    assert normalize_ingredient_text("2 garlic cloves") == "2 garlic cloves"


def test_normalize_empty_and_non_string():
    """Empty or non-string input yields empty string."""
    assert normalize_ingredient_text("") == ""
    assert normalize_ingredient_text("   ") == ""
    assert normalize_ingredient_text(None) == ""


@pytest.mark.parametrize("raw", [
    "Vitamin C 500mg, extra",
    "5 5 mg g",
    "  A!!b  ",
    "niacin 1.5 mg (as niacinamide)",
    "100% Juice",
    "E-621 / MSG",
])
def test_normalize_idempotent(raw):
    """normalize(normalize(x)) == normalize(x)."""
    once = normalize_ingredient_text(raw)
    assert normalize_ingredient_text(once) == once


def test_parse_simple_list():
    """Plain comma-separated list round-trips."""
    assert parse_ingredient_list("Water, Sugar, Salt") == ["Water", "Sugar", "Salt"]


def test_parse_empty_input():
    """Empty or whitespace-only input gives an empty list."""
    assert parse_ingredient_list("") == []
    assert parse_ingredient_list("   ") == []
    assert parse_ingredient_list(None) == []


def test_parse_breakdown_group():
    """Parenthetical sub-list expands to parent followed by prefixed sub-entries."""
    out = parse_ingredient_list("Enriched Flour (Wheat Flour, Niacin, Iron), Sugar")
    assert out == [
        "Enriched Flour",
        SUB_ENTRY_PREFIX + "Wheat Flour",
        SUB_ENTRY_PREFIX + "Niacin",
        SUB_ENTRY_PREFIX + "Iron",
        "Sugar",
    ]
    assert [is_sub_entry(e) for e in out] == [False, True, True, True, False]


def test_parse_aside_dropped():
    """A parenthetical without commas is a gloss and is dropped."""
    assert parse_ingredient_list("Lecithin (Soy), Salt") == ["Lecithin", "Salt"]


def test_parse_soft_separator_less_than():
    """'Contains less than 2% of:' acts as a separator."""
    out = parse_ingredient_list("Water, Contains less than 2% of: Salt, Citric Acid")
    assert out == ["Water", "Salt", "Citric Acid"]


def test_parse_soft_separator_variants():
    """'contains 2% or less of', 'may contain' and the 'Ingredients:' label."""
    assert parse_ingredient_list("Ingredients: Water, Sugar") == ["Water", "Sugar"]
    assert parse_ingredient_list("Water, Contains 2% or less of: Salt") == ["Water", "Salt"]
    assert parse_ingredient_list("Oats, May contain: Milk") == ["Oats", "Milk"]
    assert parse_ingredient_list("Sugar, Contains one or more of: Canola Oil") == ["Sugar", "Canola Oil"]


def test_parse_malformed_brackets_never_raise():
    """Unbalanced brackets fall back to literal text with the bracket characters removed."""
    assert parse_ingredient_list("Flour [Wheat, Salt") == ["Flour Wheat", "Salt"]
    assert parse_ingredient_list("Flour (wheat, Salt") == ["Flour wheat", "Salt"]
    assert parse_ingredient_list("Sugar), Salt") == ["Sugar", "Salt"]


def test_parse_complex_label():
    """Full label keeps order and one nesting level."""
    raw = ("Water, Enriched Wheat Flour (Wheat Flour, Niacin, Reduced Iron, Thiamine Mononitrate, "
           "Riboflavin, Folic Acid), Sugar, Natural Flavors, Salt")
    out = parse_ingredient_list(raw)
    top = [e for e in out if not is_sub_entry(e)]
    assert top == ["Water", "Enriched Wheat Flour", "Sugar", "Natural Flavors", "Salt"]
    assert out[2:8] == [SUB_ENTRY_PREFIX + s for s in (
        "Wheat Flour", "Niacin", "Reduced Iron", "Thiamine Mononitrate", "Riboflavin", "Folic Acid",
    )]


def test_group_entries_pairs_parent_and_children():
    """group_entries attaches sub-entries to the preceding parent."""
    out = parse_ingredient_list("Enriched Flour (Wheat Flour, Niacin, Iron), Sugar")
    assert group_entries(out) == [
        ("Enriched Flour", ["Wheat Flour", "Niacin", "Iron"]),
        ("Sugar", []),
    ]


def test_group_entries_orphan_sub_promoted():
    """A sub-entry with no parent becomes top-level."""
    assert group_entries([SUB_ENTRY_PREFIX + "Niacin", "Salt"]) == [("Niacin", []), ("Salt", [])]


def test_parse_breakdown_without_parent_splits():
    """A breakdown group with no parent text yields one entry per part."""
    assert parse_ingredient_list("[Wheat, Salt]") == ["Wheat", "Salt"]
    assert parse_ingredient_list("Sugar, (Wheat, Salt)") == ["Sugar", "Wheat", "Salt"]
