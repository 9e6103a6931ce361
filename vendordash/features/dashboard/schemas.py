"""Pydantic schemas for the vendor dashboard response.

JSON field names follow the dashboard client contract (``isPositive``,
``topSales``); Python code uses snake_case attribute names.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums / value types
# =============================================================================


class PeriodKind(str, Enum):
    """Comparison periods shown on the dashboard."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class DateRange:
    """Calendar dates bounding a current period and the one before it.

    The previous period is ``[previous_boundary, current_start)`` and the
    current period is ``[current_start, current_end)``. Dates are in the
    reporting time zone.
    """

    previous_boundary: date
    current_start: date
    current_end: date

    @property
    def previous_is_empty(self) -> bool:
        """True when the previous period contains no days."""
        return self.previous_boundary >= self.current_start


# =============================================================================
# Response Schemas
# =============================================================================


class TrendReport(BaseModel):
    """Period-over-period change for one comparison period."""

    model_config = ConfigDict(populate_by_name=True)

    percentage: int = Field(
        ...,
        le=100,
        description="Truncated percent change vs the previous period, capped at 100. "
        "100 when the previous period had no sales.",
    )
    is_positive: bool = Field(
        ...,
        alias="isPositive",
        description="True only when the current period strictly beats the previous one.",
    )
    total: int = Field(..., description="Paid order total for the current period.")


class TopSale(BaseModel):
    """A product ranked by cumulative ordered quantity."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., description="Catalog product id.")
    product_name: str = Field(..., description="Catalog product name.")
    product_price: float = Field(..., ge=0, description="Catalog unit price.")
    total_quantity: int = Field(
        ...,
        ge=0,
        alias="total",
        description="Units ordered across all of the vendor's orders.",
    )


class DaySale(BaseModel):
    """Sales total for one weekday of the trailing week."""

    day: str = Field(..., description="Weekday name, Sunday through Saturday.")
    sales: int = Field(0, ge=0, description="Order total for that weekday.")


class SalesTarget(BaseModel):
    """Monthly sales target and progress towards it."""

    target: int = Field(0, ge=0, description="Configured monthly sales target (0 = none).")
    current: int = Field(0, ge=0, description="Paid order total for the monthly period.")


class DashboardResponse(BaseModel):
    """Everything the vendor dashboard renders, computed for one request."""

    model_config = ConfigDict(populate_by_name=True)

    daily: TrendReport
    weekly: TrendReport
    monthly: TrendReport
    target: SalesTarget
    top_sales: list[TopSale] = Field(
        default_factory=list,
        alias="topSales",
        description="Up to 10 products, highest ordered quantity first.",
    )
    sales: list[DaySale] = Field(
        ...,
        min_length=7,
        max_length=7,
        description="Trailing week of sales, Sunday first.",
    )
