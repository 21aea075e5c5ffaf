"""
Post-processing of OCR text from a label photo: isolate the ingredient section and
repair common character confusions. Text only; image capture and recognition are external.
"""
import re
import logging

logger = logging.getLogger(__name__)

_SECTION_PATTERNS = [
    re.compile(
        r"ingredients?[:\s]*(.+?)(?:\.(?:\s|$)|nutrition|allergen|contains|manufactured|distributed|$)",
        re.IGNORECASE | re.DOTALL,
    ),
    re.compile(
        r"contains?[:\s]*(.+?)(?:\.(?:\s|$)|nutrition|allergen|manufactured|distributed|$)",
        re.IGNORECASE | re.DOTALL,
    ),
]
# Digit zero between two letters is a letter o
_ZERO_IN_WORD = re.compile(r"(?<=[A-Za-z])0(?=[A-Za-z])")


def clean_ocr_text(text: str) -> str:
    """Collapse line breaks and whitespace; '|' -> 'l'; 0 between letters -> 'o'."""
    if not text:
        return ""
    t = re.sub(r"[\r\n]+", " ", text)
    t = re.sub(r"\s+", " ", t).strip()
    t = t.replace("|", "l")
    return _ZERO_IN_WORD.sub("o", t)


def extract_ingredients_section(ocr_text: str) -> str:
    """
    Text between an 'Ingredients:' (or 'Contains:') header and the next stop marker.
    Falls back to the whole cleaned text when no header is found.
    """
    cleaned = clean_ocr_text(ocr_text)
    if not cleaned:
        return ""
    for pattern in _SECTION_PATTERNS:
        m = pattern.search(cleaned)
        if m and m.group(1).strip():
            section = m.group(1).strip()
            logger.debug("OCR_TEXT section found chars=%d", len(section))
            return section
    logger.info("OCR_TEXT no ingredient header; using full text chars=%d", len(cleaned))
    return cleaned
