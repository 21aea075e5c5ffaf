"""
Canonical matcher: exact dictionary lookup, then fuzzy search over every canonical name
and synonym. The index is built once in the constructor and never mutated; a changed
dictionary means a new CanonicalMatcher.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from rapidfuzz import fuzz, process

from label_core.config import FUZZY_MATCH_THRESHOLD, MIN_FUZZY_MATCH_THRESHOLD

logger = logging.getLogger(__name__)

UNRESOLVED_CONFIDENCE = 0.5

# Tokens carrying a digit: vitamin letters (b6, d3), E-numbers (e250), positions (5-mthf)
_CODE_TOKEN = re.compile(r"[a-z]*\d+[a-z]*")


def label_similarity(query: str, choice: str, **kwargs) -> float:
    """
    0..100 similarity between a normalized label token and a dictionary key.
    - Digit-bearing code tokens must agree exactly; "vitamin b6" never scores against "vitamin b9".
    - A query whose words all occur in the key scores as a token-set match, so
      "vitamin b6" finds "vitamin b6 pyridoxine".
    - Anything else is plain edit-distance similarity over the whole string.
    """
    if set(_CODE_TOKEN.findall(query)) != set(_CODE_TOKEN.findall(choice)):
        return 0.0
    if set(query.split()) <= set(choice.split()):
        return fuzz.token_set_ratio(query, choice)
    return fuzz.ratio(query, choice)


@dataclass(frozen=True)
class MatchResult:
    canonical_name: str
    confidence: float
    matched_key: str = ""


class CanonicalMatcher:
    """
    exact_keys: surface form (lower-cased) -> canonical name.
    fuzzy_keys: (searchable key, canonical name) pairs; one per canonical name and per synonym.
    """

    def __init__(
        self,
        exact_keys: Dict[str, str],
        fuzzy_keys: Iterable[Tuple[str, str]],
        threshold: float = FUZZY_MATCH_THRESHOLD,
    ):
        self._exact: Dict[str, str] = dict(exact_keys)
        pairs = list(fuzzy_keys)
        self._choices: List[str] = [k for k, _ in pairs]
        self._owners: List[str] = [c for _, c in pairs]
        self._threshold = max(threshold, MIN_FUZZY_MATCH_THRESHOLD)

    @property
    def threshold(self) -> float:
        return self._threshold

    def __len__(self) -> int:
        return len(self._choices)

    def match(self, normalized_text: str) -> MatchResult:
        """
        1. Exact key hit -> confidence 1.0.
        2. Best fuzzy hit with confidence (1 - dissimilarity) >= threshold.
        3. Otherwise the text itself, confidence 0.5 (unresolved identity).
        """
        key = (normalized_text or "").lower()
        canonical = self._exact.get(key)
        if canonical is not None:
            return MatchResult(canonical, 1.0, key)

        if key and self._choices:
            best = process.extractOne(
                key,
                self._choices,
                scorer=label_similarity,
                score_cutoff=self._threshold * 100,
            )
            if best is not None:
                choice, score, idx = best
                confidence = round(score / 100.0, 4)
                if confidence >= self._threshold:
                    logger.debug(
                        "MATCHER fuzzy text=%s key=%s canonical=%s confidence=%.3f",
                        key, choice, self._owners[idx], confidence,
                    )
                    return MatchResult(self._owners[idx], confidence, choice)

        return MatchResult(normalized_text or "", UNRESOLVED_CONFIDENCE)
