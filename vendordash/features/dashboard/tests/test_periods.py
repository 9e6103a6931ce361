"""Tests for period window computation."""

from datetime import UTC, date, datetime, timedelta

import pytz

from vendordash.features.dashboard.periods import (
    compute_window,
    compute_windows,
    now_in_zone,
    subtract_months,
)
from vendordash.features.dashboard.schemas import PeriodKind

SHANGHAI = pytz.timezone("Asia/Shanghai")


def at(year: int, month: int, day: int, hour: int = 12) -> datetime:
    """Shanghai-local instant."""
    return SHANGHAI.localize(datetime(year, month, day, hour))


class TestComputeWindow:
    """Tests for compute_window."""

    def test_daily(self) -> None:
        """Daily compares today with yesterday."""
        window = compute_window(PeriodKind.DAILY, at(2024, 6, 15))

        assert window.previous_boundary == date(2024, 6, 14)
        assert window.current_start == date(2024, 6, 15)
        assert window.current_end == date(2024, 6, 16)

    def test_weekly(self) -> None:
        """Weekly covers the last 7 days including today."""
        window = compute_window(PeriodKind.WEEKLY, at(2024, 6, 15))

        assert window.previous_boundary == date(2024, 6, 8)
        assert window.current_start == date(2024, 6, 9)
        assert window.current_end == date(2024, 6, 16)
        assert (window.current_end - window.current_start).days == 7

    def test_monthly(self) -> None:
        """Monthly covers 30 days and looks back one calendar month."""
        window = compute_window(PeriodKind.MONTHLY, at(2024, 6, 15))

        assert window.previous_boundary == date(2024, 5, 15)
        assert window.current_start == date(2024, 5, 17)
        assert window.current_end == date(2024, 6, 16)
        assert (window.current_end - window.current_start).days == 30

    def test_monthly_clamps_short_month(self) -> None:
        """One month before March 31 is the last day of February."""
        window = compute_window(PeriodKind.MONTHLY, at(2024, 3, 31))

        assert window.previous_boundary == date(2024, 2, 29)
        assert window.current_start == date(2024, 3, 2)

    def test_monthly_previous_can_be_empty(self) -> None:
        """Early March in a non-leap year leaves no previous days."""
        window = compute_window(PeriodKind.MONTHLY, at(2023, 3, 1))

        assert window.previous_boundary == date(2023, 2, 1)
        assert window.current_start == date(2023, 1, 31)
        assert window.previous_is_empty is True

    def test_uses_local_calendar_day(self) -> None:
        """A UTC evening is already tomorrow in Shanghai."""
        now = datetime(2024, 6, 15, 20, 0, tzinfo=UTC).astimezone(SHANGHAI)

        window = compute_window(PeriodKind.DAILY, now)

        assert window.current_start == date(2024, 6, 16)

    def test_year_boundary(self) -> None:
        """Windows cross the new year."""
        daily = compute_window(PeriodKind.DAILY, at(2024, 1, 1))
        monthly = compute_window(PeriodKind.MONTHLY, at(2024, 1, 1))

        assert daily.previous_boundary == date(2023, 12, 31)
        assert monthly.previous_boundary == date(2023, 12, 1)


class TestComputeWindows:
    """Tests for compute_windows."""

    def test_all_kinds_share_current_end(self) -> None:
        """Every window ends tomorrow."""
        windows = compute_windows(at(2024, 6, 15))

        assert set(windows) == set(PeriodKind)
        assert {w.current_end for w in windows.values()} == {date(2024, 6, 16)}

    def test_non_degenerate_windows_are_ordered(self) -> None:
        """previous < current_start <= current_end on an ordinary day."""
        for window in compute_windows(at(2024, 6, 15)).values():
            assert window.previous_boundary < window.current_start <= window.current_end


class TestHelpers:
    """Tests for date helpers."""

    def test_subtract_months_across_year(self) -> None:
        """Subtracting past January wraps the year."""
        assert subtract_months(date(2024, 1, 31), 1) == date(2023, 12, 31)
        assert subtract_months(date(2024, 2, 15), 14) == date(2022, 12, 15)

    def test_subtract_months_non_leap_february(self) -> None:
        """Day is clamped to 28 in non-leap February."""
        assert subtract_months(date(2023, 3, 30), 1) == date(2023, 2, 28)

    def test_subtract_months_clamps_instead_of_rolling_over(self) -> None:
        """Month-end days stay in the target month."""
        assert subtract_months(date(2025, 7, 31), 1) == date(2025, 6, 30)
        assert subtract_months(date(2025, 5, 31), 1) == date(2025, 4, 30)
        assert subtract_months(date(2025, 3, 31), 1) == date(2025, 2, 28)

    def test_now_in_zone_offset(self) -> None:
        """now_in_zone returns an aware datetime in the zone."""
        now = now_in_zone(SHANGHAI)

        assert now.utcoffset() == timedelta(hours=8)
