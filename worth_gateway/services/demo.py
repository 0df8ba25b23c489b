"""Demo mode - serves synthesized balance histories through the storage interface"""

from dataclasses import replace
from datetime import date, datetime, time, timezone
from typing import Dict, List, Optional, Sequence

from worth_gateway.domain.models import Account, Snapshot, SnapshotRow, SyntheticHistory
from worth_gateway.domain.synthetic import generate_history
from worth_gateway.infrastructure.observability.metrics import synthetic_history_counter
from worth_gateway.services.balances import AccountSource, MissingSnapshotDefaults
from worth_gateway.utils.date_utils import generate_date_range, offset_days


class SyntheticSnapshotSource:
    """
    Account and snapshot source backed by generated histories.

    Each account gets one daily snapshot per day of its synthetic history,
    ending today at its latest recorded balance (or the default balance).
    A new instance is built per request; within it each account's history
    is generated once and counted once.
    """

    def __init__(self, accounts: AccountSource, today: date, defaults: MissingSnapshotDefaults = MissingSnapshotDefaults()):
        self._accounts = accounts
        self.today = today
        self.defaults = defaults
        self._generated: Dict[int, SyntheticHistory] = {}

    def _history(self, account: Account) -> SyntheticHistory:
        if account.id in self._generated:
            return self._generated[account.id]

        history = generate_history(
            account_id=account.id,
            category=account.category,
            target_final_balance_minor=self.defaults.balance(account.latest_balance_minor),
            sign=account.normal_balance_sign,
            today=self.today,
        )
        synthetic_history_counter.labels(category=account.category.value).inc()
        self._generated[account.id] = history
        return history

    def _with_history(self, account: Account) -> Account:
        history = self._history(account)
        return replace(
            account,
            first_snapshot_date=history.start_date,
            latest_snapshot_date=history.end_date,
            latest_balance_minor=history.values[-1],
        )

    def _histories(self, account_ids: Sequence[int]) -> Dict[int, SyntheticHistory]:
        wanted = set(account_ids)
        return {a.id: self._history(a) for a in self._accounts.list_accounts() if a.id in wanted}

    # Account source

    def list_accounts(self) -> List[Account]:
        return [self._with_history(a) for a in self._accounts.list_accounts()]

    def get_account(self, account_id: int) -> Optional[Account]:
        account = self._accounts.get_account(account_id)
        return self._with_history(account) if account is not None else None

    # Snapshot source

    def snapshots_between(self, account_ids: Sequence[int], start_date: date, end_date: date) -> List[SnapshotRow]:
        rows = []
        for account_id, history in sorted(self._histories(account_ids).items()):
            for day, value in zip(generate_date_range(history.start_date, history.end_date), history.values):
                if start_date <= day <= end_date:
                    rows.append(SnapshotRow(account_id=account_id, date=day, balance_minor=value))
        return rows

    def last_snapshot_before(self, account_ids: Sequence[int], cutoff_date: date) -> List[SnapshotRow]:
        rows = []
        for account_id, history in sorted(self._histories(account_ids).items()):
            offset = (cutoff_date - history.start_date).days - 1
            if offset < 0:
                continue
            index = min(offset, len(history.values) - 1)
            rows.append(
                SnapshotRow(
                    account_id=account_id,
                    date=offset_days(history.start_date, index),
                    balance_minor=history.values[index],
                )
            )
        return rows

    def earliest_snapshot_date(self, account_ids: Optional[Sequence[int]] = None) -> Optional[date]:
        if account_ids is None:
            account_ids = [a.id for a in self._accounts.list_accounts()]
        starts = [h.start_date for h in self._histories(account_ids).values()]
        return min(starts) if starts else None

    def snapshots_for_account(self, account_id: int) -> List[Snapshot]:
        history = self._histories([account_id]).get(account_id)
        if history is None:
            return []

        days = generate_date_range(history.start_date, history.end_date)
        snapshots = [
            Snapshot(
                id=index + 1,
                account_id=account_id,
                date=day,
                balance_minor=value,
                created_at=datetime.combine(day, time.min, tzinfo=timezone.utc),
            )
            for index, (day, value) in enumerate(zip(days, history.values))
        ]
        return list(reversed(snapshots))
