from .aggregator import summarize_ingredients, recalculate_product_safety
from .confidence import calculate_overall_confidence

__all__ = ["summarize_ingredients", "recalculate_product_safety", "calculate_overall_confidence"]
