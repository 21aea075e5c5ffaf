"""
Types shared by the product-lookup connectors.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ProductRecord:
    """Product as returned by an external database. ingredients_text is raw label text."""
    upc: str
    name: str
    source: str  # "open_food_facts" | "upcitemdb" | "demo"
    brand: Optional[str] = None
    ingredients_text: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "upc": self.upc,
            "name": self.name,
            "brand": self.brand,
            "ingredients_text": self.ingredients_text,
            "image_url": self.image_url,
            "source": self.source,
        }


@dataclass
class ProductLookupResult:
    success: bool
    product: Optional[ProductRecord] = None
    searched_apis: List[str] = field(default_factory=list)
    error: Optional[str] = None
