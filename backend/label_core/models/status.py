"""
Shared status vocabularies. Values are the lower-case strings used in the
reference-data files and in API payloads.
"""
from enum import Enum


class SafetyStatus(str, Enum):
    SAFE = "safe"
    UNSAFE = "unsafe"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SourceProvenance(str, Enum):
    """Acquisition channel of the ingredient text. Passed through, never computed."""
    API = "api"
    OCR = "ocr"
    REVIEW = "review"
    MANUAL = "manual"
    COMMUNITY = "community"
