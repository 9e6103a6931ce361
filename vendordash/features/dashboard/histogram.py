"""Bucketing of trailing-week sales into a Sunday-first calendar."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from vendordash.features.dashboard.schemas import DaySale

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def sunday_first_index(moment: datetime) -> int:
    """Weekday index with Sunday = 0 and Saturday = 6."""
    return (moment.weekday() + 1) % 7


def business_time(created: datetime, offset: timedelta) -> datetime:
    """Shift a stored creation timestamp into business time.

    Naive timestamps are taken to be UTC, which is how orders are stored.
    """
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return created.astimezone(UTC) + offset


def bucket_by_weekday(
    orders: Iterable[tuple[datetime, int]],
    offset: timedelta,
) -> dict[int, int]:
    """Sum order totals per business-time weekday.

    The same shifted timestamp that decides whether an order is inside the
    window also decides its weekday, so an order placed just after local
    midnight lands on the local day.

    Args:
        orders: ``(created, total_price)`` pairs.
        offset: Business-time offset applied to ``created``.

    Returns:
        Mapping of Sunday-first weekday index to summed sales. Days without
        orders are absent.
    """
    totals: dict[int, int] = {}
    for created, total_price in orders:
        index = sunday_first_index(business_time(created, offset))
        totals[index] = totals.get(index, 0) + int(total_price or 0)
    return totals


def build_week(day_totals: Iterable[tuple[int, int]]) -> list[DaySale]:
    """Lay sparse per-weekday totals onto a full Sunday..Saturday week.

    Args:
        day_totals: ``(weekday_index, sales)`` rows, weekday_index 0 = Sunday.

    Returns:
        Exactly seven DaySale entries; missing days report 0.

    Raises:
        ValueError: If a weekday index is outside 0..6.
    """
    week = [DaySale(day=name, sales=0) for name in WEEKDAY_NAMES]
    for index, sales in day_totals:
        if not 0 <= index < len(WEEKDAY_NAMES):
            raise ValueError(f"weekday index out of range: {index}")
        week[index] = DaySale(day=WEEKDAY_NAMES[index], sales=sales)
    return week
