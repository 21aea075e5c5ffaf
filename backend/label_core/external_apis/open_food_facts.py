"""
Open Food Facts product connector (no key required).
Product: https://world.openfoodfacts.org/api/v2/product/<upc>.json
"""
import logging
from typing import Optional, Tuple

import requests

from label_core.config import PRODUCT_LOOKUP_TIMEOUT
from .base import ProductRecord
from .http_retry import get_with_retries

logger = logging.getLogger(__name__)

OFF_PRODUCT_URL = "https://world.openfoodfacts.org/api/v2/product/{upc}.json"


def fetch_open_food_facts(
    upc: str,
    timeout: int = PRODUCT_LOOKUP_TIMEOUT,
    max_retries: int = 3,
) -> Tuple[Optional[ProductRecord], Optional[str]]:
    """Returns (product, None), (None, None) when not found, or (None, error)."""
    resp, err = get_with_retries(OFF_PRODUCT_URL.format(upc=upc), timeout=timeout, max_retries=max_retries)
    if err is not None:
        logger.warning("OPEN_FOOD_FACTS fetch failed after retries upc=%s error=%s", upc, err)
        return (None, err)
    if resp.status_code == 404:
        logger.info("OPEN_FOOD_FACTS not found upc=%s", upc)
        return (None, None)
    try:
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("OPEN_FOOD_FACTS response error upc=%s error=%s", upc, e)
        return (None, f"{type(e).__name__}: {e}")

    product = data.get("product") if data.get("status") == 1 else None
    if not product:
        logger.info("OPEN_FOOD_FACTS no product upc=%s", upc)
        return (None, None)

    record = ProductRecord(
        upc=upc,
        name=(product.get("product_name") or product.get("product_name_en") or "Unknown Product").strip(),
        brand=product.get("brands") or None,
        ingredients_text=product.get("ingredients_text") or product.get("ingredients_text_en") or None,
        image_url=product.get("image_front_url") or product.get("image_url") or None,
        source="open_food_facts",
    )
    logger.info(
        "OPEN_FOOD_FACTS success upc=%s name=%s has_ingredients=%s",
        upc, record.name[:60], bool(record.ingredients_text),
    )
    return (record, None)
