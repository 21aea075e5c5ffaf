"""
UPCitemdb trial connector. Used when Open Food Facts has no record; the description
field is the closest thing to an ingredient list it offers.
"""
import logging
from typing import Optional, Tuple

import requests

from label_core.config import PRODUCT_LOOKUP_TIMEOUT
from .base import ProductRecord
from .http_retry import get_with_retries

logger = logging.getLogger(__name__)

UPCITEMDB_LOOKUP_URL = "https://api.upcitemdb.com/prod/trial/lookup"


def fetch_upcitemdb(
    upc: str,
    timeout: int = PRODUCT_LOOKUP_TIMEOUT,
    max_retries: int = 2,
) -> Tuple[Optional[ProductRecord], Optional[str]]:
    resp, err = get_with_retries(
        UPCITEMDB_LOOKUP_URL,
        params={"upc": upc},
        headers={"Accept": "application/json"},
        timeout=timeout,
        max_retries=max_retries,
    )
    if err is not None:
        logger.warning("UPCITEMDB fetch failed after retries upc=%s error=%s", upc, err)
        return (None, err)
    try:
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("UPCITEMDB response error upc=%s error=%s", upc, e)
        return (None, f"{type(e).__name__}: {e}")

    items = data.get("items") or []
    if not items:
        logger.info("UPCITEMDB no items upc=%s", upc)
        return (None, None)
    item = items[0]
    images = item.get("images") or []
    return (
        ProductRecord(
            upc=upc,
            name=item.get("title") or "Unknown Product",
            brand=item.get("brand") or None,
            ingredients_text=item.get("description") or None,
            image_url=images[0] if images else None,
            source="upcitemdb",
        ),
        None,
    )
