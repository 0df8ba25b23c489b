"""Balance history service - fetches snapshots and builds dense series for callers"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Protocol, Sequence

from worth_gateway.domain.activity import FULL_WINDOW_DAYS, slice_windows
from worth_gateway.domain.exceptions import AccountNotFoundError
from worth_gateway.domain.models import Account, AccountActivity, BalancePoint, DashboardSummary, Snapshot, SnapshotRow
from worth_gateway.domain.portfolio import aggregate, summarize_portfolio
from worth_gateway.domain.resampling import observations_by_account, resample, seeds_by_account
from worth_gateway.utils.date_utils import BalancePeriod, day_count, generate_date_range, period_start, trailing_start

logger = logging.getLogger(__name__)

# Dashboard yield compares today with the same day last month
DASHBOARD_POINTS = 31


class AccountSource(Protocol):
    def list_accounts(self) -> List[Account]: ...

    def get_account(self, account_id: int) -> Optional[Account]: ...


class SnapshotSource(Protocol):
    def snapshots_between(self, account_ids: Sequence[int], start_date: date, end_date: date) -> List[SnapshotRow]: ...

    def last_snapshot_before(self, account_ids: Sequence[int], cutoff_date: date) -> List[SnapshotRow]: ...

    def earliest_snapshot_date(self, account_ids: Optional[Sequence[int]] = None) -> Optional[date]: ...

    def snapshots_for_account(self, account_id: int) -> List[Snapshot]: ...


@dataclass(frozen=True)
class MissingSnapshotDefaults:
    """
    What to report for an account with no snapshots at all.

    use_today_for_dates: first/latest snapshot dates fall back to today
        (otherwise to the account's opened date, then today)
    balance_minor: latest balance reported in place of a missing one
    """

    use_today_for_dates: bool = True
    balance_minor: int = 0

    def snapshot_date(self, known: Optional[date], account: Account, today: date) -> date:
        if known is not None:
            return known
        if not self.use_today_for_dates and account.opened_date is not None:
            return account.opened_date
        return today

    def balance(self, known: Optional[int]) -> int:
        return known if known is not None else self.balance_minor


class BalanceService:
    """
    Answers balance-history questions for a set of accounts.

    Storage is injected; every call reads what it needs and keeps its
    working data local, so one instance can serve concurrent requests.
    Storage errors propagate unchanged and abort the whole request.
    """

    def __init__(
        self,
        accounts: AccountSource,
        snapshots: SnapshotSource,
        today: date,
        defaults: MissingSnapshotDefaults = MissingSnapshotDefaults(),
    ):
        self.accounts = accounts
        self.snapshots = snapshots
        self.today = today
        self.defaults = defaults

    def _require_account(self, account_id: int) -> Account:
        account = self.accounts.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _activity_for(self, accounts: Sequence[Account]) -> List[AccountActivity]:
        # One 180-day series per account; every window is a suffix of it
        full_start = trailing_start(self.today, FULL_WINDOW_DAYS)
        account_ids = [a.id for a in accounts]

        observations = observations_by_account(self.snapshots.snapshots_between(account_ids, full_start, self.today))
        seeds = seeds_by_account(self.snapshots.last_snapshot_before(account_ids, full_start))

        result = []
        for account in accounts:
            series = resample(observations.get(account.id, {}), seeds.get(account.id), full_start, FULL_WINDOW_DAYS)
            result.append(
                AccountActivity(
                    account=account,
                    first_snapshot_date=self.defaults.snapshot_date(account.first_snapshot_date, account, self.today),
                    latest_snapshot_date=self.defaults.snapshot_date(account.latest_snapshot_date, account, self.today),
                    latest_balance_minor=self.defaults.balance(account.latest_balance_minor),
                    activity_by_period=slice_windows(series),
                )
            )
        return result

    def list_accounts(self) -> List[AccountActivity]:
        """All accounts with 1W/1M/3M/6M activity windows"""
        return self._activity_for(self.accounts.list_accounts())

    def get_account(self, account_id: int) -> AccountActivity:
        """One account with activity windows; raises AccountNotFoundError"""
        return self._activity_for([self._require_account(account_id)])[0]

    def account_snapshots(self, account_id: int) -> List[Snapshot]:
        """Recorded snapshots for one account, newest first"""
        self._require_account(account_id)
        return self.snapshots.snapshots_for_account(account_id)

    def account_balance_over_time(self, account_id: int, period: BalancePeriod) -> List[BalancePoint]:
        """
        Daily balances for one account over a lookback period.

        The range never starts before the account's first snapshot; an
        account with no snapshots yields an empty list.
        """
        self._require_account(account_id)

        earliest = self.snapshots.earliest_snapshot_date([account_id])
        if earliest is None:
            return []

        start = max(period_start(period, self.today, earliest), earliest)
        points = day_count(start, self.today)
        if points == 0:
            return []

        observations = observations_by_account(self.snapshots.snapshots_between([account_id], start, self.today))
        seeds = seeds_by_account(self.snapshots.last_snapshot_before([account_id], start))
        series = resample(observations.get(account_id, {}), seeds.get(account_id), start, points)

        return [
            BalancePoint(date=day, balance_minor=value if value is not None else 0)
            for day, value in zip(generate_date_range(start, self.today), series)
        ]

    def total_balance_between(self, accounts: Sequence[Account], start: date, end: date) -> List[BalancePoint]:
        """Portfolio total per day over [start, end]"""
        if end < start:
            return []

        account_ids = [a.id for a in accounts]
        observations = observations_by_account(self.snapshots.snapshots_between(account_ids, start, end))
        seeds = seeds_by_account(self.snapshots.last_snapshot_before(account_ids, start))
        totals = aggregate(account_ids, observations, seeds, start, end)

        return [BalancePoint(date=day, balance_minor=total) for day, total in zip(generate_date_range(start, end), totals)]

    def portfolio_balance_over_time(self, period: BalancePeriod) -> List[BalancePoint]:
        """Net worth per day over a lookback period"""
        accounts = self.accounts.list_accounts()
        earliest = self.snapshots.earliest_snapshot_date() if period is BalancePeriod.MAX else None
        start = period_start(period, self.today, earliest)
        return self.total_balance_between(accounts, start, self.today)

    def dashboard(self) -> DashboardSummary:
        """Headline totals, allocation and month-on-month change"""
        accounts = self.accounts.list_accounts()
        month = self.total_balance_between(accounts, trailing_start(self.today, DASHBOARD_POINTS), self.today)
        summary = summarize_portfolio(
            accounts,
            [p.balance_minor for p in month],
            missing_balance_minor=self.defaults.balance_minor,
        )
        logger.debug("Dashboard built for %d accounts", len(accounts))
        return summary
