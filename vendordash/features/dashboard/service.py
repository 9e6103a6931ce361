"""Service layer for the vendor dashboard.

Runs the read queries behind the dashboard and assembles the response.
Every query either returns its value or raises ``DataAccessError``; nothing
here catches that error, so the first failure aborts the request.
"""

from collections.abc import Sequence
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from vendordash.core.config import Settings, get_settings
from vendordash.core.exceptions import DataAccessError
from vendordash.core.logging import get_logger
from vendordash.features.dashboard.histogram import bucket_by_weekday, build_week
from vendordash.features.dashboard.periods import compute_windows, now_in_zone
from vendordash.features.dashboard.ranking import rank_products, tally_quantities
from vendordash.features.dashboard.schemas import (
    DashboardResponse,
    DateRange,
    DaySale,
    PeriodKind,
    SalesTarget,
    TopSale,
    TrendReport,
)
from vendordash.features.dashboard.trends import compare
from vendordash.features.orders.models import Order, Product
from vendordash.features.orders.schemas import LineItemDecodeError

logger = get_logger(__name__)


class DashboardService:
    """Computes the vendor dashboard.

    The reporting zone and order-time offset are resolved once from settings
    when the service is created and passed explicitly into every window and
    query.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize dashboard service.

        Args:
            settings: Settings to use; defaults to the cached settings.

        Raises:
            ConfigurationError: If the reporting zone cannot be loaded.
        """
        self.settings = settings or get_settings()
        self.zone = self.settings.reporting_zone
        self.offset = timedelta(hours=self.settings.dashboard_order_offset_hours)

    def utc_bound(self, day: date) -> datetime:
        """UTC instant at which ``day`` starts in business time.

        Comparing ``created`` against shifted bounds is equivalent to
        comparing ``created + offset`` against the date itself.
        """
        return datetime.combine(day, time.min, tzinfo=UTC) - self.offset

    async def _execute(
        self,
        db: AsyncSession,
        stmt: Executable,
        query: str,
        vendor_id: str,
    ) -> Result[Any]:
        try:
            return await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(
                "dashboard.query_failed",
                query=query,
                vendor_id=vendor_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DataAccessError(
                f"Failed to load {query} for vendor",
                details={"query": query, "vendor_id": vendor_id},
            ) from e

    # =========================================================================
    # Trends
    # =========================================================================

    async def sum_paid_orders(
        self,
        db: AsyncSession,
        vendor_id: str,
        range_start: date,
        range_end: date,
    ) -> int:
        """Sum paid order totals created in ``[range_start, range_end)``.

        Args:
            db: Database session.
            vendor_id: Vendor to filter on.
            range_start: First business-time day included.
            range_end: First business-time day excluded.

        Returns:
            Total of ``total_price``; 0 when nothing matches.

        Raises:
            DataAccessError: If the query fails.
        """
        if range_start >= range_end:
            logger.debug(
                "dashboard.empty_range_skipped",
                vendor_id=vendor_id,
                range_start=str(range_start),
                range_end=str(range_end),
            )
            return 0

        stmt = select(func.coalesce(func.sum(Order.total_price), 0)).where(
            Order.vendor_id == vendor_id,
            Order.order_status == self.settings.dashboard_paid_status,
            Order.created >= self.utc_bound(range_start),
            Order.created < self.utc_bound(range_end),
        )
        result = await self._execute(db, stmt, "paid_order_sum", vendor_id)
        return int(result.scalar_one() or 0)

    async def fetch_period_data(
        self,
        db: AsyncSession,
        vendor_id: str,
        window: DateRange,
    ) -> TrendReport:
        """Compare the current period of ``window`` against the previous one.

        Args:
            db: Database session.
            vendor_id: Vendor to report on.
            window: Period window.

        Returns:
            TrendReport for the window.
        """
        current = await self.sum_paid_orders(
            db, vendor_id, window.current_start, window.current_end
        )
        previous = await self.sum_paid_orders(
            db, vendor_id, window.previous_boundary, window.current_start
        )
        return compare(current, previous)

    # =========================================================================
    # Top products
    # =========================================================================

    async def top_products(
        self,
        db: AsyncSession,
        vendor_id: str,
        limit: int | None = None,
    ) -> list[TopSale]:
        """Rank the vendor's products by total ordered quantity.

        Orders of every status count. Line items are decoded once per order.

        Args:
            db: Database session.
            vendor_id: Vendor to report on.
            limit: Maximum entries (defaults to the configured limit).

        Returns:
            Up to ``limit`` TopSale entries, highest quantity first.

        Raises:
            DataAccessError: If a query fails or stored line items are invalid.
        """
        if limit is None:
            limit = self.settings.dashboard_top_products_limit

        details_stmt = select(Order.orders_detail).where(Order.vendor_id == vendor_id)
        details = await self._execute(db, details_stmt, "order_line_items", vendor_id)

        try:
            quantities = tally_quantities(details.scalars().all())
        except LineItemDecodeError as e:
            logger.error(
                "dashboard.line_items_invalid",
                vendor_id=vendor_id,
                error=str(e),
            )
            raise DataAccessError(
                "Stored order line items could not be decoded",
                details={"query": "order_line_items", "vendor_id": vendor_id},
            ) from e

        if not quantities:
            return []

        catalog_stmt = select(Product.id, Product.product_name, Product.product_price).where(
            Product.id.in_(list(quantities))
        )
        catalog_rows: Sequence[Any] = (
            await self._execute(db, catalog_stmt, "product_catalog", vendor_id)
        ).all()

        return rank_products(quantities, {row.id: row for row in catalog_rows}, limit)

    # =========================================================================
    # Weekly histogram
    # =========================================================================

    async def weekly_histogram(
        self,
        db: AsyncSession,
        vendor_id: str,
        window: DateRange,
    ) -> list[DaySale]:
        """Sales per weekday over the current period of the weekly window.

        Orders of every status count. Both the window filter and the weekday
        grouping use business time.

        Args:
            db: Database session.
            vendor_id: Vendor to report on.
            window: Weekly period window.

        Returns:
            Seven DaySale entries, Sunday first.

        Raises:
            DataAccessError: If the query fails.
        """
        stmt = select(Order.created, Order.total_price).where(
            Order.vendor_id == vendor_id,
            Order.created >= self.utc_bound(window.current_start),
            Order.created < self.utc_bound(window.current_end),
        )
        result = await self._execute(db, stmt, "weekly_sales", vendor_id)

        totals = bucket_by_weekday(
            ((row.created, row.total_price) for row in result.all()),
            self.offset,
        )
        return build_week(sorted(totals.items()))

    # =========================================================================
    # Dashboard
    # =========================================================================

    async def get_dashboard(
        self,
        db: AsyncSession,
        vendor_id: str,
        now: datetime | None = None,
    ) -> DashboardResponse:
        """Compute every dashboard metric for a vendor.

        Args:
            db: Database session.
            vendor_id: Vendor to report on.
            now: Anchor instant (defaults to the current time in the
                reporting zone). A naive value is taken as UTC.

        Returns:
            Complete dashboard response.

        Raises:
            DataAccessError: On the first failing query.
        """
        if now is None:
            now = now_in_zone(self.zone)
        else:
            if now.tzinfo is None:
                now = now.replace(tzinfo=UTC)
            now = now.astimezone(self.zone)
        windows = compute_windows(now)

        trends: dict[PeriodKind, TrendReport] = {}
        for kind, window in windows.items():
            trends[kind] = await self.fetch_period_data(db, vendor_id, window)
            logger.debug(
                "dashboard.period_computed",
                vendor_id=vendor_id,
                period=kind.value,
                previous_boundary=str(window.previous_boundary),
                current_start=str(window.current_start),
                current_end=str(window.current_end),
                total=trends[kind].total,
            )

        top_sales = await self.top_products(db, vendor_id)
        sales = await self.weekly_histogram(db, vendor_id, windows[PeriodKind.WEEKLY])

        monthly = trends[PeriodKind.MONTHLY]
        response = DashboardResponse(
            daily=trends[PeriodKind.DAILY],
            weekly=trends[PeriodKind.WEEKLY],
            monthly=monthly,
            target=SalesTarget(
                target=self.settings.dashboard_monthly_target,
                current=monthly.total,
            ),
            top_sales=top_sales,
            sales=sales,
        )

        logger.info(
            "dashboard.computed",
            vendor_id=vendor_id,
            as_of=now.date().isoformat(),
            daily_total=response.daily.total,
            weekly_total=response.weekly.total,
            monthly_total=monthly.total,
            top_sales_count=len(top_sales),
        )

        return response
