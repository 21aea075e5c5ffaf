"""
Deterministic lexical cleanup of a single ingredient token. No lookup, no fuzzy matching.
The result is the key used for canonical lookup.
"""
import re
import logging

logger = logging.getLogger(__name__)

# Anything except letters, digits, whitespace, hyphen and apostrophe (underscore is a \w char, so listed explicitly)
_DISALLOWED_CHARS = re.compile(r"[^\w\s'\-]|_")
_WHITESPACE = re.compile(r"\s+")
# "500mg", "1.5 g", "400 IU", "2%". Word boundary keeps "2 garlic" intact.
_QUANTITY = re.compile(
    r"\d+(?:\.\d+)?\s*(?:(?:mg|mcg|ml|g|iu)\b|%)",
    re.IGNORECASE,
)


def _clean_once(text: str) -> str:
    t = text.lower()
    t = _QUANTITY.sub(" ", t)
    t = _DISALLOWED_CHARS.sub(" ", t)
    t = _WHITESPACE.sub(" ", t).strip()
    t = _QUANTITY.sub(" ", t)
    return _WHITESPACE.sub(" ", t).strip()


def normalize_ingredient_text(raw: str) -> str:
    """
    Normalize a raw ingredient token for lookup.
    - Lowercase; replace characters outside letters/digits/space/hyphen/apostrophe with a space.
    - Collapse whitespace and trim.
    - Remove quantity annotations (<number> mg|g|ml|mcg|iu|%) anywhere in the string.
    Repeats until stable so normalize(normalize(x)) == normalize(x).
    """
    if not raw or not isinstance(raw, str):
        return ""
    current = raw
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned
