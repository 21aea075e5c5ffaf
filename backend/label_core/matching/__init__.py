from .matcher import CanonicalMatcher, MatchResult, UNRESOLVED_CONFIDENCE

__all__ = ["CanonicalMatcher", "MatchResult", "UNRESOLVED_CONFIDENCE"]
