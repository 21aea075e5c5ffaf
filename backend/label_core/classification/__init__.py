from .masking import check_masking, MaskingCheck, VAGUE_PHRASES
from .classifier import SafetyClassifier

__all__ = ["check_masking", "MaskingCheck", "VAGUE_PHRASES", "SafetyClassifier"]
