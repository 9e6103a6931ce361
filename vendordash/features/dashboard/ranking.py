"""Top-product ranking from embedded order line items."""

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from vendordash.features.dashboard.schemas import TopSale
from vendordash.features.orders.schemas import decode_line_items


class CatalogEntry(Protocol):
    """Catalog columns the ranker needs."""

    id: str
    product_name: str
    product_price: float


def tally_quantities(order_details: Iterable[Any]) -> Counter[str]:
    """Sum ordered quantity per product across orders.

    Args:
        order_details: Raw ``orders_detail`` values, one per order.

    Returns:
        Counter of product id to total quantity.

    Raises:
        LineItemDecodeError: If a value cannot be decoded.
    """
    quantities: Counter[str] = Counter()
    for raw in order_details:
        for item in decode_line_items(raw):
            quantities[item.product_id] += item.quantity
    return quantities


def rank_products(
    quantities: Mapping[str, int],
    catalog: Mapping[str, CatalogEntry],
    limit: int = 10,
) -> list[TopSale]:
    """Rank catalog products by ordered quantity.

    Products missing from the catalog are skipped. Equal quantities are
    ordered by product id so results are stable between requests.

    Args:
        quantities: Product id to total quantity.
        catalog: Product id to catalog row.
        limit: Maximum number of entries.

    Returns:
        At most ``limit`` TopSale entries, highest quantity first.
    """
    ranked = sorted(
        (
            (product_id, quantity)
            for product_id, quantity in quantities.items()
            if product_id in catalog
        ),
        key=lambda pair: (-pair[1], pair[0]),
    )
    return [
        TopSale(
            product_id=product_id,
            product_name=catalog[product_id].product_name,
            product_price=float(catalog[product_id].product_price or 0),
            total_quantity=quantity,
        )
        for product_id, quantity in ranked[:limit]
    ]
