"""
Split a raw ingredient-list string into an ordered list of entries.

A parenthetical group containing commas is a breakdown of the preceding ingredient:
'Enriched Flour (Wheat Flour, Niacin, Iron)' ->
['Enriched Flour', '  Wheat Flour', '  Niacin', '  Iron']
Sub-ingredient entries carry SUB_ENTRY_PREFIX. A parenthetical without commas is a gloss
and is dropped: 'Lecithin (Soy)' -> ['Lecithin'].
"""
import re
import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)

SUB_ENTRY_PREFIX = "  "

# List-introduction phrases act as soft separators, not content
_SOFT_SEPARATORS = [
    re.compile(r"contains\s*\d+(?:\.\d+)?\s*%*\s*or\s*less\s*(?:of\s*)?:?", re.IGNORECASE),
    re.compile(r"contains\s*(?:less\s*than\s*)?\d+(?:\.\d+)?\s*%+\s*(?:of\s*)?:?", re.IGNORECASE),
    re.compile(r"contains\s*(?:one\s*or\s*more\s*of\s*)?:?", re.IGNORECASE),
    re.compile(r"may\s*contain\s*:?", re.IGNORECASE),
]
_INGREDIENTS_LABEL = re.compile(r"\bingredients\s*:", re.IGNORECASE)

_INNER_PARENS = re.compile(r"\s*\(([^()]*)\)")
# Comma not followed by a closing bracket before the next opening one, i.e. not inside [...]
_TOP_LEVEL_COMMA = re.compile(r",(?![^\[]*\])")
_BREAKDOWN = re.compile(r"^([^\[]+?)\s*\[([^\]]+)\]")
_ASIDE = re.compile(r"^([^(]+?)\s*\(([^)]+)\)")


def _rewrite_soft_separators(text: str) -> str:
    for pat in _SOFT_SEPARATORS:
        text = pat.sub(",", text)
    return _INGREDIENTS_LABEL.sub("", text)


def _mark_breakdown_groups(text: str) -> str:
    """Parentheses holding a comma-separated sub-list become [...]; others stay as (...)."""
    def _replace(match: "re.Match[str]") -> str:
        inner = match.group(1)
        if "," in inner:
            return f" [{inner}]"
        return match.group(0)
    return _INNER_PARENS.sub(_replace, text)


def _expand_chunk(chunk: str) -> List[str]:
    if "[" in chunk or "]" in chunk:
        m = _BREAKDOWN.match(chunk)
        if m:
            out = [m.group(1).strip()]
            for sub in m.group(2).split(","):
                sub = sub.strip()
                if sub:
                    out.append(SUB_ENTRY_PREFIX + sub)
            return out
        logger.debug("PARSER malformed breakdown group chunk=%s", chunk[:60])
        # No parent text to hang the group on: each comma-separated part is its own entry
        return [p.strip() for p in re.sub(r"[\[\]]", " ", chunk).split(",") if p.strip()]
    if "(" in chunk or ")" in chunk:
        m = _ASIDE.match(chunk)
        if m:
            return [m.group(1).strip()]
        logger.debug("PARSER malformed parenthetical chunk=%s", chunk[:60])
        return [re.sub(r"[()]", " ", chunk).strip()]
    return [chunk]


def parse_ingredient_list(raw: str) -> List[str]:
    """
    Parse a raw ingredient list into ordered entries.

    1. Soft separators ('contains less than 2% of:', 'contains:', 'may contain:') become commas;
       the 'ingredients:' label is removed.
    2. Parentheses with internal commas become breakdown groups.
    3. Split on commas outside breakdown groups.
    4. Breakdown groups emit the parent then each sub-ingredient (prefixed); asides are dropped.
    Never raises: malformed brackets fall back to the chunk text with bracket characters removed.
    """
    if not raw or not isinstance(raw, str) or not raw.strip():
        return []
    text = _rewrite_soft_separators(raw)
    text = _mark_breakdown_groups(text)

    entries: List[str] = []
    for chunk in _TOP_LEVEL_COMMA.split(text):
        chunk = chunk.strip()
        if not chunk:
            continue
        for entry in _expand_chunk(chunk):
            is_sub = entry.startswith(SUB_ENTRY_PREFIX)
            body = " ".join(entry.split())
            if not body:
                continue
            entries.append(SUB_ENTRY_PREFIX + body if is_sub else body)
    return entries


def is_sub_entry(entry: str) -> bool:
    return entry.startswith(SUB_ENTRY_PREFIX)


def group_entries(entries: List[str]) -> List[Tuple[str, List[str]]]:
    """
    Pair each top-level entry with its sub-entries: [(parent, [sub, ...]), ...].
    A sub-entry with no preceding parent is promoted to top level.
    """
    grouped: List[Tuple[str, List[str]]] = []
    for entry in entries:
        text = entry.strip()
        if not text:
            continue
        if is_sub_entry(entry) and grouped:
            grouped[-1][1].append(text)
        else:
            grouped.append((text, []))
    return grouped
