"""
OCR text post-processing: ingredient section extraction and character repair.
Run from backend: python -m pytest tests/test_ocr_text.py -v
"""
import pytest

from label_core.models.status import SafetyStatus, SourceProvenance
from label_core.ocr_text import clean_ocr_text, extract_ingredients_section


def test_clean_collapses_whitespace():
    assert clean_ocr_text("Water,\n  Sugar,\r\n\tSalt ") == "Water, Sugar, Salt"


def test_clean_repairs_confusions():
    """'|' reads as 'l'; a zero inside a word reads as 'o'."""
    assert clean_ocr_text("Natura| F0od C0lor") == "Natural Food Color"


def test_clean_keeps_numbers():
    assert clean_ocr_text("Vitamin C 500mg, B12 100mcg") == "Vitamin C 500mg, B12 100mcg"


@pytest.mark.parametrize("raw", ["", None])
def test_clean_empty(raw):
    assert clean_ocr_text(raw) == ""
    assert extract_ingredients_section(raw) == ""


def test_section_stops_at_sentence_end():
    text = "Crunchy Crackers\nINGREDIENTS: Water, Sugar, Salt. Nutrition Facts Serving Size 30g"
    assert extract_ingredients_section(text) == "Water, Sugar, Salt"


def test_section_stops_at_allergen_statement():
    text = "Ingredients: Enriched Flour (Wheat Flour, Niacin), Sugar Contains: Wheat"
    assert extract_ingredients_section(text) == "Enriched Flour (Wheat Flour, Niacin), Sugar"


def test_section_keeps_decimal_points():
    """A period inside a number is not a sentence end."""
    text = "Ingredients: Vitamin B1 2.5mg, Water."
    assert extract_ingredients_section(text) == "Vitamin B1 2.5mg, Water"


def test_section_multiline_to_end():
    assert extract_ingredients_section("INGREDIENTS:\nWater,\nSugar") == "Water, Sugar"


def test_contains_header_fallback():
    """Without an ingredients header a 'Contains:' header is used."""
    assert extract_ingredients_section("Contains: Milk, Soy. Keep refrigerated") == "Milk, Soy"


def test_no_header_returns_full_text():
    assert extract_ingredients_section("Water, Sugar, Salt") == "Water, Sugar, Salt"


def test_ocr_section_through_pipeline(pipeline):
    """Extracted OCR section classifies like typed text, tagged with provenance 'ocr'."""
    section = extract_ingredients_section("INGREDIENTS: Aqua, Fo|ic Acid, Sea Sa|t. Best before 2025")
    assert section == "Aqua, Folic Acid, Sea Salt"
    ingredients, summary = pipeline.analyze(section, SourceProvenance.OCR)
    assert [i.canonical_name for i in ingredients] == ["water", "folic acid", "salt"]
    assert summary.overall_status == SafetyStatus.UNSAFE
    assert summary.source_provenance == SourceProvenance.OCR
