"""
Settings for the label core: reference-data paths, matching threshold, restriction
profiles and product-lookup flags. Paths resolve from the backend directory; env values
may come from backend/.env (loaded by app.py).
"""
import os
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# backend/label_core/config.py -> backend -> repo root
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent

# --- Matching ---
# Fuzzy hits below this confidence are never accepted; env may raise it, not lower it
MIN_FUZZY_MATCH_THRESHOLD = 0.7

def get_fuzzy_match_threshold() -> float:
    raw = os.environ.get("FUZZY_MATCH_THRESHOLD", "").strip()
    if not raw:
        return MIN_FUZZY_MATCH_THRESHOLD
    try:
        value = float(raw)
    except ValueError:
        logger.warning("CONFIG FUZZY_MATCH_THRESHOLD=%r is not a number; using %.2f", raw, MIN_FUZZY_MATCH_THRESHOLD)
        return MIN_FUZZY_MATCH_THRESHOLD
    if value < MIN_FUZZY_MATCH_THRESHOLD:
        logger.warning("CONFIG FUZZY_MATCH_THRESHOLD=%.2f below floor; using %.2f", value, MIN_FUZZY_MATCH_THRESHOLD)
        return MIN_FUZZY_MATCH_THRESHOLD
    return value

FUZZY_MATCH_THRESHOLD = get_fuzzy_match_threshold()

# --- Data paths ---
def get_data_dir() -> Path:
    return _REPO_ROOT / "data"

def get_canonical_ingredients_path() -> Path:
    return get_data_dir() / "canonical_ingredients.json"

def get_masking_terms_path() -> Path:
    return get_data_dir() / "masking_terms.json"

def get_classification_rules_path() -> Path:
    return get_data_dir() / "classification_rules.json"

# --- Restriction profiles ---
def get_enabled_profiles() -> Optional[frozenset]:
    """Profiles whose rules take part in classification. None means every profile."""
    raw = os.environ.get("ENABLED_PROFILES", "").strip()
    if not raw:
        return None
    return frozenset(p.strip().lower() for p in raw.split(",") if p.strip())

# --- External product lookup (lazy read from env) ---
def get_open_food_facts_enabled() -> bool:
    return os.environ.get("OPEN_FOOD_FACTS_ENABLED", "true").lower() in ("1", "true", "yes")

def get_upcitemdb_enabled() -> bool:
    return os.environ.get("UPCITEMDB_ENABLED", "true").lower() in ("1", "true", "yes")

PRODUCT_LOOKUP_TIMEOUT = int(os.environ.get("PRODUCT_LOOKUP_TIMEOUT", "10"))

# --- Startup logging ---
def log_config() -> None:
    profiles = get_enabled_profiles()
    logger.info(
        "CONFIG: ingredients=%s masking_terms=%s rules=%s enabled_profiles=%s "
        "fuzzy_threshold=%.2f off_enabled=%s upcitemdb_enabled=%s lookup_timeout=%ds",
        get_canonical_ingredients_path().exists(),
        get_masking_terms_path().exists(),
        get_classification_rules_path().exists(),
        sorted(profiles) if profiles is not None else "all",
        FUZZY_MATCH_THRESHOLD,
        get_open_food_facts_enabled(), get_upcitemdb_enabled(),
        PRODUCT_LOOKUP_TIMEOUT,
    )
