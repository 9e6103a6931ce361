"""API routes for the vendor dashboard."""

from functools import lru_cache

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vendordash.core.database import get_db
from vendordash.core.logging import get_logger
from vendordash.features.dashboard.schemas import DashboardResponse
from vendordash.features.dashboard.service import DashboardService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])


@lru_cache
def get_dashboard_service() -> DashboardService:
    """Shared dashboard service built from the cached settings."""
    return DashboardService()


@router.post(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Compute the vendor sales dashboard",
    description="""
Compute every dashboard metric for one vendor in a single response.

**Trend periods** (paid orders only, business-time calendar days):
- `daily`: today vs yesterday
- `weekly`: last 7 days vs the day before them
- `monthly`: last 30 days vs the days back to one calendar month ago

`percentage` is capped at 100 and is 100 whenever the previous period had
no sales. `isPositive` is true only when the current period strictly beats
the previous one.

**Other metrics**:
- `target`: configured monthly target and the monthly paid total
- `topSales`: up to 10 products by units ordered (all order statuses)
- `sales`: trailing week of order totals per weekday, Sunday first
""",
)
async def get_dashboard(
    vendor_id: str = Query(
        ...,
        alias="vendorId",
        min_length=1,
        max_length=36,
        description="Vendor to compute the dashboard for.",
    ),
    db: AsyncSession = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """Compute the dashboard for a vendor.

    Args:
        vendor_id: Vendor id from the ``vendorId`` query parameter.
        db: Database session.
        service: Dashboard service.

    Returns:
        Dashboard response.
    """
    logger.info("dashboard.requested", vendor_id=vendor_id)
    return await service.get_dashboard(db=db, vendor_id=vendor_id)
