"""Date windows for daily, weekly and monthly comparisons.

All windows are anchored to "today" in the reporting time zone, which is
passed in explicitly rather than read from process state.
"""

import calendar
from datetime import UTC, date, datetime, timedelta, tzinfo

from vendordash.features.dashboard.schemas import DateRange, PeriodKind

ONE_DAY = timedelta(days=1)


def now_in_zone(zone: tzinfo) -> datetime:
    """Return the current instant expressed in ``zone``."""
    return datetime.now(UTC).astimezone(zone)


def subtract_months(day: date, months: int) -> date:
    """Move ``day`` back by calendar months, clamping to the month's length.

    Overflowing days are clamped rather than rolled into the following
    month, so 31 July minus one month is 30 June, not 1 July. Rolling over
    would put the monthly previous boundary after the current period start
    on many more dates.

    >>> subtract_months(date(2024, 3, 31), 1)
    datetime.date(2024, 2, 29)
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def compute_window(kind: PeriodKind, now: datetime) -> DateRange:
    """Compute the comparison window for a period.

    Args:
        kind: Which period to compute.
        now: Current instant, already converted to the reporting zone.

    Returns:
        DateRange for the period. ``current_end`` is always tomorrow so the
        current period includes all of today.
    """
    today = now.date()
    tomorrow = today + ONE_DAY

    if kind == PeriodKind.DAILY:
        return DateRange(
            previous_boundary=today - ONE_DAY,
            current_start=today,
            current_end=tomorrow,
        )
    if kind == PeriodKind.WEEKLY:
        return DateRange(
            previous_boundary=today - timedelta(days=7),
            current_start=today - timedelta(days=6),
            current_end=tomorrow,
        )
    # Monthly: previous boundary is one calendar month back, current is 30 days
    return DateRange(
        previous_boundary=subtract_months(today, 1),
        current_start=today - timedelta(days=29),
        current_end=tomorrow,
    )


def compute_windows(now: datetime) -> dict[PeriodKind, DateRange]:
    """Compute every dashboard window for the same instant."""
    return {kind: compute_window(kind, now) for kind in PeriodKind}
