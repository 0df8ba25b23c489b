"""Unit tests for date-range helpers"""

from datetime import date
from worth_gateway.utils.date_utils import (
    BalancePeriod,
    day_count,
    generate_date_range,
    offset_days,
    period_start,
    trailing_start,
)


TODAY = date(2024, 6, 30)


def test_generate_date_range_inclusive():
    days = generate_date_range(date(2024, 2, 27), date(2024, 3, 1))
    assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_generate_date_range_inverted_is_empty():
    assert generate_date_range(date(2024, 3, 2), date(2024, 3, 1)) == []


def test_day_count():
    assert day_count(TODAY, TODAY) == 1
    assert day_count(date(2024, 6, 1), TODAY) == 30
    assert day_count(TODAY, date(2024, 6, 1)) == 0


def test_trailing_start_and_offset():
    assert trailing_start(TODAY, 1) == TODAY
    assert trailing_start(TODAY, 180) == offset_days(TODAY, -179)


def test_period_start_fixed_periods():
    assert period_start(BalancePeriod.ONE_MONTH, TODAY, None) == date(2024, 6, 1)
    assert day_count(period_start(BalancePeriod.SIX_MONTHS, TODAY, None), TODAY) == 183
    assert day_count(period_start(BalancePeriod.ONE_YEAR, TODAY, None), TODAY) == 365


def test_period_start_max_uses_earliest_or_today():
    assert period_start(BalancePeriod.MAX, TODAY, date(2020, 1, 1)) == date(2020, 1, 1)
    assert period_start(BalancePeriod.MAX, TODAY, None) == TODAY
