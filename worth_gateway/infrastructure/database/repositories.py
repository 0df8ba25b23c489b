"""Data access layer for accounts and balance snapshots"""

from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional, Sequence
from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from worth_gateway.infrastructure.database.models import (
    Account as AccountRecord,
    AccountBalanceSnapshot,
    AccountType,
    Institution,
)
from worth_gateway.domain.exceptions import DataUnavailableError
from worth_gateway.domain.models import Account, AccountCategory, Snapshot, SnapshotRow


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    """Surface any database failure as DataUnavailableError"""
    try:
        yield
    except SQLAlchemyError as e:
        raise DataUnavailableError(f"Snapshot storage unavailable during {operation}") from e


class AccountRepository:
    """Repository for accounts joined with their snapshot bounds"""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        first = (
            self.db.query(
                AccountBalanceSnapshot.account_id.label("account_id"),
                func.min(AccountBalanceSnapshot.balance_date).label("first_date"),
            )
            .group_by(AccountBalanceSnapshot.account_id)
            .subquery()
        )
        latest_date = (
            self.db.query(
                AccountBalanceSnapshot.account_id.label("account_id"),
                func.max(AccountBalanceSnapshot.balance_date).label("max_date"),
            )
            .group_by(AccountBalanceSnapshot.account_id)
            .subquery()
        )

        return (
            self.db.query(
                AccountRecord,
                Institution.name,
                AccountType.name,
                first.c.first_date,
                AccountBalanceSnapshot.balance_date,
                AccountBalanceSnapshot.balance_minor,
            )
            .join(Institution, Institution.id == AccountRecord.institution_id)
            .join(AccountType, AccountType.id == AccountRecord.type_id)
            .outerjoin(first, first.c.account_id == AccountRecord.id)
            .outerjoin(latest_date, latest_date.c.account_id == AccountRecord.id)
            .outerjoin(
                AccountBalanceSnapshot,
                and_(
                    AccountBalanceSnapshot.account_id == AccountRecord.id,
                    AccountBalanceSnapshot.balance_date == latest_date.c.max_date,
                ),
            )
        )

    @staticmethod
    def _to_domain(row) -> Account:
        record, institution_name, type_name, first_date, latest_date, latest_balance = row
        return Account(
            id=record.id,
            name=record.name,
            institution_id=record.institution_id,
            institution_name=institution_name,
            type_id=record.type_id,
            category=AccountCategory.parse(type_name),
            currency_code=record.currency_code,
            normal_balance_sign=record.normal_balance_sign,
            opened_date=record.opened_date,
            closed_date=record.closed_date,
            first_snapshot_date=first_date,
            latest_snapshot_date=latest_date,
            latest_balance_minor=latest_balance,
        )

    def list_accounts(self) -> List[Account]:
        """All accounts ordered by name"""
        with translate_storage_errors("list_accounts"):
            rows = self._base_query().order_by(AccountRecord.name.asc(), AccountRecord.id.asc()).all()
        return [self._to_domain(row) for row in rows]

    def get_account(self, account_id: int) -> Optional[Account]:
        """Fetch one account, or None if it does not exist"""
        with translate_storage_errors("get_account"):
            row = self._base_query().filter(AccountRecord.id == account_id).first()
        return self._to_domain(row) if row is not None else None


class SnapshotRepository:
    """Repository for balance snapshots"""

    def __init__(self, db: Session):
        self.db = db

    def snapshots_between(self, account_ids: Sequence[int], start_date: date, end_date: date) -> List[SnapshotRow]:
        """Snapshots with start_date <= date <= end_date for the given accounts"""
        if not account_ids:
            return []

        with translate_storage_errors("snapshots_between"):
            rows = (
                self.db.query(
                    AccountBalanceSnapshot.account_id,
                    AccountBalanceSnapshot.balance_date,
                    AccountBalanceSnapshot.balance_minor,
                )
                .filter(
                    AccountBalanceSnapshot.balance_date >= start_date,
                    AccountBalanceSnapshot.balance_date <= end_date,
                    AccountBalanceSnapshot.account_id.in_(list(account_ids)),
                )
                .order_by(AccountBalanceSnapshot.account_id.asc(), AccountBalanceSnapshot.balance_date.asc())
                .all()
            )
        return [SnapshotRow(account_id=a, date=d, balance_minor=b) for a, d, b in rows]

    def last_snapshot_before(self, account_ids: Sequence[int], cutoff_date: date) -> List[SnapshotRow]:
        """Most recent snapshot strictly before cutoff_date, at most one per account"""
        if not account_ids:
            return []

        with translate_storage_errors("last_snapshot_before"):
            latest = (
                self.db.query(
                    AccountBalanceSnapshot.account_id.label("account_id"),
                    func.max(AccountBalanceSnapshot.balance_date).label("max_date"),
                )
                .filter(
                    AccountBalanceSnapshot.balance_date < cutoff_date,
                    AccountBalanceSnapshot.account_id.in_(list(account_ids)),
                )
                .group_by(AccountBalanceSnapshot.account_id)
                .subquery()
            )
            rows = (
                self.db.query(
                    AccountBalanceSnapshot.account_id,
                    AccountBalanceSnapshot.balance_date,
                    AccountBalanceSnapshot.balance_minor,
                )
                .join(
                    latest,
                    and_(
                        latest.c.account_id == AccountBalanceSnapshot.account_id,
                        latest.c.max_date == AccountBalanceSnapshot.balance_date,
                    ),
                )
                .order_by(AccountBalanceSnapshot.account_id.asc())
                .all()
            )
        return [SnapshotRow(account_id=a, date=d, balance_minor=b) for a, d, b in rows]

    def earliest_snapshot_date(self, account_ids: Optional[Sequence[int]] = None) -> Optional[date]:
        """Earliest snapshot date for the given accounts, or across all accounts when None"""
        if account_ids is not None and not account_ids:
            return None

        with translate_storage_errors("earliest_snapshot_date"):
            query = self.db.query(func.min(AccountBalanceSnapshot.balance_date))
            if account_ids is not None:
                query = query.filter(AccountBalanceSnapshot.account_id.in_(list(account_ids)))
            return query.scalar()

    def snapshots_for_account(self, account_id: int) -> List[Snapshot]:
        """Full snapshot history for one account, newest first"""
        with translate_storage_errors("snapshots_for_account"):
            rows = (
                self.db.query(AccountBalanceSnapshot)
                .filter(AccountBalanceSnapshot.account_id == account_id)
                .order_by(AccountBalanceSnapshot.balance_date.desc())
                .all()
            )
        return [
            Snapshot(
                id=r.id,
                account_id=r.account_id,
                date=r.balance_date,
                balance_minor=r.balance_minor,
                created_at=r.created_at,
            )
            for r in rows
        ]
