"""Orders and product catalog persistence.

- ``Order``: vendor orders with embedded line items.
- ``Product``: catalog rows joined by the dashboard ranker.
"""

from vendordash.features.orders.models import Order, Product
from vendordash.features.orders.schemas import LineItem, LineItemDecodeError, decode_line_items

__all__ = [
    "LineItem",
    "LineItemDecodeError",
    "Order",
    "Product",
    "decode_line_items",
]
