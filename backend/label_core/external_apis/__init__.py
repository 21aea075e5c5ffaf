"""
External product databases (Open Food Facts, UPCitemdb) for UPC lookup.
"""
from .base import ProductRecord, ProductLookupResult
from .upc import normalize_upc, validate_upc
from .open_food_facts import fetch_open_food_facts
from .upcitemdb import fetch_upcitemdb
from .fetcher import lookup_product_by_upc, demo_product

__all__ = [
    "ProductRecord",
    "ProductLookupResult",
    "normalize_upc",
    "validate_upc",
    "fetch_open_food_facts",
    "fetch_upcitemdb",
    "lookup_product_by_upc",
    "demo_product",
]
