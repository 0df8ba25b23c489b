"""Domain models - pure Python dataclasses representing balance-tracking entities"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional

from worth_gateway.domain.exceptions import InvalidCategoryError


class AccountCategory(str, Enum):
    """Closed set of account classifications"""

    CURRENT = "current"
    SAVINGS = "savings"
    CREDIT_CARD = "credit_card"
    ISA = "isa"
    INVESTMENT = "investment"
    PENSION = "pension"
    CASH = "cash"
    LOAN = "loan"

    @classmethod
    def parse(cls, value: str) -> "AccountCategory":
        """Map a stored type name to a category, rejecting anything outside the set"""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidCategoryError(value) from e


@dataclass(frozen=True)
class Account:
    """Account record joined with its snapshot bounds"""

    id: int
    name: str
    institution_id: int
    institution_name: str
    type_id: int
    category: AccountCategory
    currency_code: str
    normal_balance_sign: int  # +1 asset, -1 debt
    opened_date: Optional[date] = None
    closed_date: Optional[date] = None
    first_snapshot_date: Optional[date] = None
    latest_snapshot_date: Optional[date] = None
    latest_balance_minor: Optional[int] = None


@dataclass(frozen=True)
class Snapshot:
    """Single recorded balance observation"""

    id: int
    account_id: int
    date: date
    balance_minor: int
    created_at: datetime


@dataclass(frozen=True)
class SnapshotRow:
    """Minimal snapshot projection returned by range queries"""

    account_id: int
    date: date
    balance_minor: int


@dataclass
class ActivityWindow:
    """Trailing slice of a dense series with its first-to-last delta"""

    tag: str
    values: List[Optional[int]]
    delta_minor: int


@dataclass
class AccountActivity:
    """Account plus activity windows over its trailing history"""

    account: Account
    first_snapshot_date: date
    latest_snapshot_date: date
    latest_balance_minor: int
    activity_by_period: Dict[str, ActivityWindow] = field(default_factory=dict)


@dataclass(frozen=True)
class BalancePoint:
    """Balance as of the end of a calendar day"""

    date: date
    balance_minor: int


@dataclass
class SyntheticHistory:
    """Generated dense series, every value known"""

    start_date: date
    values: List[int]

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=len(self.values) - 1)


@dataclass(frozen=True)
class AllocationSlice:
    """Positive balance held in one account category"""

    category: AccountCategory
    balance_minor: int


@dataclass
class DashboardSummary:
    """Portfolio headline figures"""

    total_balance_minor: int
    change_vs_last_month_pct: float
    monthly_yield_minor: int
    active_accounts: int
    allocation_by_type: List[AllocationSlice]
