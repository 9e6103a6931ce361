"""Period-over-period trend calculation."""

from vendordash.features.dashboard.schemas import TrendReport

MAX_PERCENTAGE = 100


def _truncated_div(numerator: int, denominator: int) -> int:
    # Python's // floors; dashboards expect truncation toward zero
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def percent_change(current: int, previous: int) -> int:
    """Truncated percent change from ``previous`` to ``current``.

    The difference is scaled by 100 before dividing so small changes are not
    lost to integer truncation. The result is capped at 100 but has no lower
    bound. A zero ``previous`` yields 100 whatever ``current`` is.
    """
    if previous == 0:
        return MAX_PERCENTAGE
    percentage = _truncated_div((current - previous) * 100, previous)
    return min(percentage, MAX_PERCENTAGE)


def compare(current: int, previous: int) -> TrendReport:
    """Build the trend report for a current and previous period sum.

    Args:
        current: Sum for the current period.
        previous: Sum for the previous period.

    Returns:
        TrendReport with capped percentage, strict ``is_positive`` and the
        current total.
    """
    return TrendReport(
        percentage=percent_change(current, previous),
        is_positive=current > previous,
        total=current,
    )
