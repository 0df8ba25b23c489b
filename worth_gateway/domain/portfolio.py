"""Cross-account aggregation and dashboard figures"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from worth_gateway.domain.models import Account, AccountCategory, AllocationSlice, DashboardSummary
from worth_gateway.domain.resampling import resample
from worth_gateway.utils.date_utils import day_count

logger = logging.getLogger(__name__)

_CATEGORY_ORDER = {category: index for index, category in enumerate(AccountCategory)}


def aggregate(
    account_ids: Iterable[int],
    observations: Mapping[int, Mapping[date, int]],
    seeds: Mapping[int, int],
    range_start: date,
    range_end: date,
) -> List[int]:
    """
    Sum per-account dense series into one portfolio series.

    Each account is resampled on its own with its own seed-before value.
    An unknown day contributes 0: before its first snapshot an account is
    treated as not yet part of the portfolio. An empty or inverted range
    gives an empty list.
    """
    points = day_count(range_start, range_end)
    if points == 0:
        return []

    return sum_series(
        (resample(observations.get(account_id, {}), seeds.get(account_id), range_start, points) for account_id in set(account_ids)),
        points,
    )


def sum_series(series_list: Iterable[Sequence[Optional[int]]], length: int) -> List[int]:
    """Elementwise sum of equal-length dense series, unknown days counting as 0"""
    totals = [0] * length
    for series in series_list:
        for i, value in enumerate(series):
            if value is not None:
                totals[i] += value
    return totals


def summarize_portfolio(
    accounts: Sequence[Account],
    monthly_series: Sequence[int],
    missing_balance_minor: int = 0,
) -> DashboardSummary:
    """
    Headline figures for the dashboard.

    Requirements:
    - Total is the sum of each account's latest balance
    - An account counts as active when its latest balance is non-zero
      (zero-balance open accounts count the same as closed ones)
    - Allocation groups by category and keeps only positive totals
    - Monthly yield compares the last point of a 31-point series with its first
    """
    total = 0
    active = 0
    allocation: Dict[AccountCategory, int] = {}

    for account in accounts:
        latest = account.latest_balance_minor
        if latest is None:
            latest = missing_balance_minor
        total += latest
        if latest != 0:
            active += 1
        allocation[account.category] = allocation.get(account.category, 0) + latest

    slices = [
        AllocationSlice(category=category, balance_minor=balance)
        for category, balance in sorted(allocation.items(), key=lambda item: _CATEGORY_ORDER[item[0]])
        if balance > 0
    ]

    last = monthly_series[-1] if monthly_series else total
    month_ago = monthly_series[max(len(monthly_series) - 31, 0)] if monthly_series else last
    monthly_yield = last - month_ago
    change_pct = (monthly_yield / month_ago) * 100.0 if month_ago != 0 else 0.0

    logger.debug("Portfolio summary: total=%s active=%s", total, active)

    return DashboardSummary(
        total_balance_minor=total,
        change_vs_last_month_pct=change_pct,
        monthly_yield_minor=monthly_yield,
        active_accounts=active,
        allocation_by_type=slices,
    )
