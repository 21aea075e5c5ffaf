"""
UPC/EAN code cleanup and validation.
"""
import re
from typing import Optional, Tuple


def normalize_upc(upc: str) -> str:
    """
    Digits only. EAN-13 with a leading 0 becomes UPC-A (12 digits);
    shorter codes are left-padded to 12 digits.
    """
    cleaned = re.sub(r"[^0-9]", "", upc or "")
    if len(cleaned) == 13 and cleaned.startswith("0"):
        return cleaned[1:]
    if len(cleaned) < 12:
        return cleaned.zfill(12) if cleaned else cleaned
    return cleaned


def validate_upc(upc: str) -> Tuple[bool, Optional[str]]:
    """Returns (True, None) or (False, message). Accepts 8 to 14 digits after cleanup."""
    cleaned = re.sub(r"[^0-9]", "", upc or "")
    if not cleaned:
        return (False, "UPC is required")
    if len(cleaned) < 8:
        return (False, "UPC must be at least 8 digits")
    if len(cleaned) > 14:
        return (False, "UPC cannot exceed 14 digits")
    return (True, None)
