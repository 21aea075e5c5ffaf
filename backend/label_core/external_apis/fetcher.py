"""
Product lookup across external databases in priority order: Open Food Facts, then UPCitemdb.
Never raises; connector failures are logged and the next connector is tried.
"""
import logging
from typing import Callable, List, Optional, Tuple

from label_core.config import get_open_food_facts_enabled, get_upcitemdb_enabled
from .base import ProductLookupResult, ProductRecord
from .open_food_facts import fetch_open_food_facts
from .upc import normalize_upc
from .upcitemdb import fetch_upcitemdb

logger = logging.getLogger(__name__)

Connector = Callable[[str], Tuple[Optional[ProductRecord], Optional[str]]]


def _connectors() -> List[Tuple[str, Connector]]:
    out: List[Tuple[str, Connector]] = []
    if get_open_food_facts_enabled():
        out.append(("Open Food Facts", fetch_open_food_facts))
    if get_upcitemdb_enabled():
        out.append(("UPC Item DB", fetch_upcitemdb))
    return out


def lookup_product_by_upc(upc: str) -> ProductLookupResult:
    code = normalize_upc(upc)
    searched: List[str] = []
    errors: List[str] = []
    for name, fetch in _connectors():
        searched.append(name)
        product, err = fetch(code)
        if product is not None:
            return ProductLookupResult(success=True, product=product, searched_apis=searched)
        if err:
            errors.append(f"{name}: {err}")
    logger.info("PRODUCT_LOOKUP not found upc=%s searched=%s errors=%d", code, searched, len(errors))
    return ProductLookupResult(
        success=False,
        searched_apis=searched,
        error="Product not found in any database" if not errors else "; ".join(errors),
    )


def demo_product(upc: str) -> ProductRecord:
    """Fixed demo product for offline use."""
    return ProductRecord(
        upc=upc,
        name="Demo Product",
        brand="Demo Brand",
        ingredients_text=(
            "Water, Enriched Wheat Flour (Wheat Flour, Niacin, Reduced Iron, Thiamine Mononitrate, "
            "Riboflavin, Folic Acid), Sugar, Natural Flavors, Salt, Yeast Extract, Citric Acid"
        ),
        source="demo",
    )
