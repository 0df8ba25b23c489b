"""Date manipulation utilities"""

from datetime import date, timedelta
from enum import Enum
from typing import List, Optional


class BalancePeriod(str, Enum):
    """Lookback periods offered for balance-over-time charts"""

    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    MAX = "MAX"


# Day counts include both endpoints; MAX has no fixed length.
BALANCE_PERIOD_DAYS = {
    BalancePeriod.ONE_MONTH: 30,
    BalancePeriod.SIX_MONTHS: 183,
    BalancePeriod.ONE_YEAR: 365,
}


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    return [start + timedelta(days=i) for i in range(day_count(start, end))]


def day_count(start: date, end: date) -> int:
    """Number of calendar days in [start, end], or 0 when end precedes start"""
    return max((end - start).days + 1, 0)


def offset_days(from_date: date, days: int) -> date:
    return from_date + timedelta(days=days)


def trailing_start(end: date, points: int) -> date:
    """First day of a window of `points` days ending on `end`"""
    return end - timedelta(days=points - 1)


def period_start(period: BalancePeriod, today: date, earliest: Optional[date]) -> date:
    """
    First day of a balance period ending today.

    MAX starts at the earliest known snapshot, falling back to today when
    there is no data at all.
    """
    if period is BalancePeriod.MAX:
        return earliest if earliest is not None else today
    return trailing_start(today, BALANCE_PERIOD_DAYS[period])
