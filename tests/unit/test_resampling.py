"""Unit tests for forward-fill resampling"""

import pytest
from datetime import date, timedelta
from worth_gateway.domain.models import SnapshotRow
from worth_gateway.domain.resampling import observations_by_account, resample, seeds_by_account


DAY0 = date(2024, 1, 1)


def day(n: int) -> date:
    return DAY0 + timedelta(days=n)


def test_resample_forward_fills_between_observations():
    """Observation on day 0 carries until the day 3 observation"""
    series = resample({day(0): 100, day(3): 130}, None, DAY0, 5)
    assert series == [100, 100, 100, 130, 130]


def test_resample_seed_only():
    """No observations: every day equals the seed"""
    assert resample({}, 50, DAY0, 3) == [50, 50, 50]


def test_resample_no_seed_no_observations_is_all_unknown():
    assert resample({}, None, DAY0, 4) == [None, None, None, None]


def test_resample_unknown_prefix_before_first_observation():
    series = resample({day(2): 70}, None, DAY0, 4)
    assert series == [None, None, 70, 70]


def test_resample_observation_overrides_seed():
    series = resample({day(1): 20}, 10, DAY0, 3)
    assert series == [10, 20, 20]


def test_resample_range_after_last_observation():
    """Range starting after all observations repeats the seed (the last value)"""
    later = day(30)
    assert resample({day(0): 100}, 100, later, 3) == [100, 100, 100]


def test_resample_ignores_observations_outside_range():
    series = resample({day(-5): 1, day(10): 2}, None, DAY0, 3)
    assert series == [None, None, None]


@pytest.mark.parametrize("length", [0, -1, -30])
def test_resample_non_positive_length_is_empty(length: int):
    assert resample({DAY0: 1}, 5, DAY0, length) == []


@pytest.mark.parametrize("length", [1, 7, 180, 400])
def test_resample_output_length(length: int):
    observations = {day(i * 13): i for i in range(40)}
    assert len(resample(observations, None, DAY0, length)) == length


def test_resample_known_values_never_revert_to_unknown():
    """Once a day is known every later day is known"""
    observations = {day(5): 0, day(9): -40, day(50): 12}
    series = resample(observations, None, DAY0, 90)

    first_known = next(i for i, v in enumerate(series) if v is not None)
    assert all(v is None for v in series[:first_known])
    assert all(v is not None for v in series[first_known:])


def test_resample_is_idempotent():
    observations = {day(3): 10, day(4): 11, day(20): 9}
    assert resample(observations, 7, DAY0, 30) == resample(observations, 7, DAY0, 30)


def test_resample_zero_balance_is_known():
    """A zero balance is a real value, not a gap"""
    assert resample({day(1): 0}, 25, DAY0, 3) == [25, 0, 0]


def test_observations_by_account_groups_rows():
    rows = [
        SnapshotRow(account_id=1, date=day(0), balance_minor=10),
        SnapshotRow(account_id=2, date=day(0), balance_minor=20),
        SnapshotRow(account_id=1, date=day(2), balance_minor=30),
    ]
    grouped = observations_by_account(rows)
    assert grouped == {1: {day(0): 10, day(2): 30}, 2: {day(0): 20}}


def test_observations_by_account_later_duplicate_wins():
    rows = [
        SnapshotRow(account_id=1, date=day(0), balance_minor=10),
        SnapshotRow(account_id=1, date=day(0), balance_minor=11),
    ]
    assert observations_by_account(rows) == {1: {day(0): 11}}


def test_seeds_by_account():
    rows = [
        SnapshotRow(account_id=1, date=day(-3), balance_minor=5),
        SnapshotRow(account_id=4, date=day(-90), balance_minor=-2),
    ]
    assert seeds_by_account(rows) == {1: 5, 4: -2}
