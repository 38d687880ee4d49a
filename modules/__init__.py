"""Helper modules: pricing engine and input sanitising."""

from .pricing import PricingEngine, PriceTable, DEFAULT_PRICE_TABLE, compute_price
from .sanitize import sanitize_text

__all__ = [
    "PricingEngine",
    "PriceTable",
    "DEFAULT_PRICE_TABLE",
    "compute_price",
    "sanitize_text",
]
