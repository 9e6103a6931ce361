"""Test fixtures for the dashboard module."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
import pytz
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vendordash.core.config import Settings, get_settings
from vendordash.core.database import Base
from vendordash.features.dashboard.schemas import (
    DashboardResponse,
    DaySale,
    SalesTarget,
    TopSale,
    TrendReport,
)
from vendordash.features.dashboard.service import DashboardService
from vendordash.features.orders.models import Order, Product
from vendordash.main import app

SHANGHAI = pytz.timezone("Asia/Shanghai")


@pytest.fixture
def settings() -> Settings:
    """Dashboard settings matching production defaults."""
    return Settings(
        dashboard_timezone="Asia/Shanghai",
        dashboard_order_offset_hours=8,
        dashboard_paid_status="paid",
        dashboard_top_products_limit=10,
        dashboard_monthly_target=50000,
    )


@pytest.fixture
def service(settings: Settings) -> DashboardService:
    """Dashboard service under test."""
    return DashboardService(settings)


@pytest.fixture
def mock_db():
    """Create mock async session."""
    return AsyncMock()


@pytest.fixture
def fixed_now() -> datetime:
    """Saturday 2024-06-15 10:00 in Shanghai."""
    return datetime(2024, 6, 15, 2, 0, tzinfo=UTC).astimezone(SHANGHAI)


@pytest.fixture
def empty_week() -> list[DaySale]:
    """Seven zero-sales days, Sunday first."""
    return [
        DaySale(day=day, sales=0)
        for day in (
            "Sunday",
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
            "Saturday",
        )
    ]


@pytest.fixture
def sample_dashboard(empty_week: list[DaySale]) -> DashboardResponse:
    """Create a sample dashboard response for route tests."""
    return DashboardResponse(
        daily=TrendReport(percentage=50, is_positive=True, total=150),
        weekly=TrendReport(percentage=-20, is_positive=False, total=800),
        monthly=TrendReport(percentage=100, is_positive=True, total=3000),
        target=SalesTarget(target=50000, current=3000),
        top_sales=[
            TopSale(
                product_id="p1",
                product_name="Milk Tea",
                product_price=12.5,
                total_quantity=40,
            )
        ],
        sales=empty_week,
    )


@pytest.fixture
async def client():
    """Create async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def db_session():
    """Create async database session for integration tests.

    Creates the orders and products tables if they are missing and removes
    rows of ``test-`` vendors afterwards. Requires PostgreSQL at
    ``DATABASE_URL``; the test is skipped when it cannot be reached.
    """
    engine = create_async_engine(get_settings().database_url, echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, SQLAlchemyError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL not available: {e}")

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with async_session_maker() as cleanup_session:
        await cleanup_session.execute(delete(Order).where(Order.vendor_id.like("test-%")))
        await cleanup_session.execute(delete(Product).where(Product.vendor_id.like("test-%")))
        await cleanup_session.commit()

    await engine.dispose()


@pytest.fixture
async def sample_product(db_session: AsyncSession) -> Product:
    """Create a catalog product for the boundary vendor."""
    product = Product(
        id="test-p-bun",
        vendor_id="test-vendor-boundary",
        product_name="Pork Bun",
        product_price=3.5,
    )
    db_session.add(product)
    await db_session.commit()
    return product


@pytest.fixture
async def boundary_orders(
    db_session: AsyncSession,
    sample_product: Product,
) -> dict[str, Order]:
    """Orders placed exactly on the business-day bounds of the 2024-06-09 week.

    With the +8h offset, business midnight of 2024-06-09 (the week start) is
    2024-06-08 16:00 UTC and business midnight of 2024-06-16 (the exclusive
    week end) is 2024-06-15 16:00 UTC.
    """
    week_start = datetime(2024, 6, 8, 16, 0, tzinfo=UTC)
    week_end = datetime(2024, 6, 15, 16, 0, tzinfo=UTC)
    line_items = [{"product_id": sample_product.id, "quantity": 2}]
    orders = {
        "at_start": Order(
            id="test-o-at-start",
            vendor_id="test-vendor-boundary",
            order_status="paid",
            total_price=100,
            orders_detail=line_items,
            created=week_start,
        ),
        "at_end": Order(
            id="test-o-at-end",
            vendor_id="test-vendor-boundary",
            order_status="paid",
            total_price=1000,
            orders_detail=line_items,
            created=week_end,
        ),
        "before_start": Order(
            id="test-o-before-start",
            vendor_id="test-vendor-boundary",
            order_status="paid",
            total_price=10,
            orders_detail=line_items,
            created=week_start - timedelta(microseconds=1),
        ),
        # Wednesday noon business time
        "pending": Order(
            id="test-o-pending",
            vendor_id="test-vendor-boundary",
            order_status="pending",
            total_price=7,
            orders_detail=line_items,
            created=datetime(2024, 6, 12, 4, 0, tzinfo=UTC),
        ),
    }
    db_session.add_all(orders.values())
    await db_session.commit()
    return orders
