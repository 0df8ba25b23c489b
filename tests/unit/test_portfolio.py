"""Unit tests for portfolio aggregation and dashboard figures"""

from datetime import date, timedelta
from worth_gateway.domain.models import Account, AccountCategory
from worth_gateway.domain.portfolio import aggregate, sum_series, summarize_portfolio


DAY0 = date(2024, 3, 1)


def day(n: int) -> date:
    return DAY0 + timedelta(days=n)


def make_account(account_id: int, category: AccountCategory, latest: int | None, sign: int = 1) -> Account:
    return Account(
        id=account_id,
        name=f"Account {account_id}",
        institution_id=1,
        institution_name="Bank",
        type_id=1,
        category=category,
        currency_code="GBP",
        normal_balance_sign=sign,
        latest_balance_minor=latest,
    )


def test_sum_series_unknown_counts_as_zero():
    """A [10, None, 20] + B [None, 5, 5] = [10, 5, 25]"""
    assert sum_series([[10, None, 20], [None, 5, 5]], 3) == [10, 5, 25]


def test_sum_series_no_series():
    assert sum_series([], 4) == [0, 0, 0, 0]


def test_aggregate_forward_fills_each_account():
    observations = {
        1: {day(0): 10, day(2): 20},
        2: {day(1): 5},
    }
    totals = aggregate([1, 2], observations, {}, day(0), day(2))
    assert totals == [10, 15, 25]


def test_aggregate_uses_per_account_seed():
    observations = {1: {day(1): 100}}
    seeds = {1: 80, 2: -30}
    totals = aggregate([1, 2], observations, seeds, day(0), day(2))
    assert totals == [50, 70, 70]


def test_aggregate_account_without_data_contributes_zero():
    totals = aggregate([1, 2], {1: {day(0): 7}}, {}, day(0), day(1))
    assert totals == [7, 7]


def test_aggregate_inverted_range_is_empty():
    assert aggregate([1], {1: {day(0): 7}}, {}, day(3), day(0)) == []


def test_aggregate_single_day_range():
    assert aggregate([1], {1: {day(0): 7}}, {}, day(0), day(0)) == [7]


def test_aggregate_is_additive_over_disjoint_accounts():
    observations = {
        1: {day(0): 100, day(4): 150},
        2: {day(2): -40},
        3: {day(6): 9},
        4: {},
    }
    seeds = {2: -10, 4: 3}
    group_a = [1, 2]
    group_b = [3, 4]

    both = aggregate(group_a + group_b, observations, seeds, day(0), day(7))
    only_a = aggregate(group_a, observations, seeds, day(0), day(7))
    only_b = aggregate(group_b, observations, seeds, day(0), day(7))

    assert both == [a + b for a, b in zip(only_a, only_b)]


def test_aggregate_ignores_duplicate_ids():
    totals = aggregate([1, 1], {1: {day(0): 5}}, {}, day(0), day(1))
    assert totals == [5, 5]


def test_summarize_portfolio_totals_and_allocation():
    accounts = [
        make_account(1, AccountCategory.CURRENT, 65_000),
        make_account(2, AccountCategory.CREDIT_CARD, -15_000, sign=-1),
        make_account(3, AccountCategory.SAVINGS, 0),
        make_account(4, AccountCategory.CURRENT, 5_000),
    ]
    summary = summarize_portfolio(accounts, [50_000] * 31)

    assert summary.total_balance_minor == 55_000
    assert summary.active_accounts == 3
    # Credit card is net negative and savings is zero, neither is allocated
    assert [(s.category, s.balance_minor) for s in summary.allocation_by_type] == [
        (AccountCategory.CURRENT, 70_000)
    ]


def test_summarize_portfolio_zero_balance_is_not_active():
    summary = summarize_portfolio([make_account(1, AccountCategory.SAVINGS, 0)], [0] * 31)
    assert summary.active_accounts == 0


def test_summarize_portfolio_missing_balance_uses_default():
    accounts = [make_account(1, AccountCategory.CASH, None)]

    assert summarize_portfolio(accounts, []).total_balance_minor == 0
    assert summarize_portfolio(accounts, [], missing_balance_minor=250).total_balance_minor == 250


def test_summarize_portfolio_monthly_change():
    series = [40_000] + [45_000] * 29 + [50_000]
    summary = summarize_portfolio([make_account(1, AccountCategory.ISA, 50_000)], series)

    assert summary.monthly_yield_minor == 10_000
    assert summary.change_vs_last_month_pct == 25.0


def test_summarize_portfolio_change_from_zero_is_zero_pct():
    series = [0] * 30 + [1_000]
    summary = summarize_portfolio([make_account(1, AccountCategory.ISA, 1_000)], series)

    assert summary.monthly_yield_minor == 1_000
    assert summary.change_vs_last_month_pct == 0.0


def test_summarize_portfolio_allocation_follows_category_order():
    accounts = [
        make_account(1, AccountCategory.PENSION, 10),
        make_account(2, AccountCategory.CURRENT, 20),
        make_account(3, AccountCategory.ISA, 30),
    ]
    summary = summarize_portfolio(accounts, [60] * 31)
    assert [s.category for s in summary.allocation_by_type] == [
        AccountCategory.CURRENT,
        AccountCategory.ISA,
        AccountCategory.PENSION,
    ]
