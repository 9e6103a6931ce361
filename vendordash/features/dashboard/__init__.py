"""Vendor sales dashboard.

Daily/weekly/monthly trend comparisons, top-selling products and a
Sunday-first weekly sales histogram, served from one endpoint.
"""

from vendordash.features.dashboard.routes import router
from vendordash.features.dashboard.schemas import (
    DashboardResponse,
    DateRange,
    DaySale,
    PeriodKind,
    SalesTarget,
    TopSale,
    TrendReport,
)
from vendordash.features.dashboard.service import DashboardService

__all__ = [
    "DashboardResponse",
    "DashboardService",
    "DateRange",
    "DaySale",
    "PeriodKind",
    "SalesTarget",
    "TopSale",
    "TrendReport",
    "router",
]
