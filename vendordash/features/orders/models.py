"""ORM models for vendor orders and the product catalog.

- ``orders``: one row per customer order; line items are embedded in the
  ``orders_detail`` JSON column.
- ``products``: catalog rows referenced by line items.

Order timestamps are stored in UTC; reporting applies a fixed business-time
offset on read.
"""

from typing import Any

from sqlalchemy import JSON, CheckConstraint, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vendordash.core.database import Base
from vendordash.shared.models import TimestampMixin


class Product(TimestampMixin, Base):
    """Product catalog table.

    Attributes:
        id: Primary key (opaque string id).
        vendor_id: Owning vendor.
        product_name: Display name.
        product_price: Unit price.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    vendor_id: Mapped[str] = mapped_column(String(36), index=True)
    product_name: Mapped[str] = mapped_column(String(200))
    product_price: Mapped[float] = mapped_column(Float, default=0.0)

    __table_args__ = (
        CheckConstraint("product_price >= 0", name="ck_products_price_positive"),
    )


class Order(TimestampMixin, Base):
    """Customer order table.

    Attributes:
        id: Primary key (opaque string id).
        vendor_id: Vendor the order was placed with.
        order_status: Lifecycle status; only "paid" orders count toward trends.
        total_price: Order total in whole currency units.
        orders_detail: Embedded line items, a JSON list of
            ``{"product_id": ..., "quantity": ...}`` objects.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    vendor_id: Mapped[str] = mapped_column(String(36), index=True)
    order_status: Mapped[str] = mapped_column(String(20), index=True)
    total_price: Mapped[int] = mapped_column(Integer, default=0)
    orders_detail: Mapped[Any] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        # Trend sums filter by vendor + status over a created range
        Index("ix_orders_vendor_status_created", "vendor_id", "order_status", "created"),
        CheckConstraint("total_price >= 0", name="ck_orders_total_positive"),
    )
