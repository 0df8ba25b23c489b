"""Pydantic schemas for API responses"""

from pydantic import BaseModel
from datetime import date, datetime
from typing import Dict, List, Optional

from worth_gateway.domain.models import AccountActivity, AccountCategory


class InstitutionSchema(BaseModel):
    id: int
    name: str


class AccountTypeSchema(BaseModel):
    id: int
    name: AccountCategory


class ActivityDataSchema(BaseModel):
    """Trailing window of daily balances; None marks days before any data"""

    values: List[Optional[int]]
    delta_minor: int


class AccountResponse(BaseModel):
    """Response for GET /v1/accounts and GET /v1/accounts/{account_id}"""

    id: int
    name: str
    institution: InstitutionSchema
    account_type: AccountTypeSchema
    currency_code: str
    normal_balance_sign: int
    opened_date: Optional[date] = None
    closed_date: Optional[date] = None
    first_snapshot_date: date
    latest_snapshot_date: date
    latest_balance_minor: int
    activity_by_period: Dict[str, ActivityDataSchema]

    @classmethod
    def from_activity(cls, activity: AccountActivity) -> "AccountResponse":
        account = activity.account
        return cls(
            id=account.id,
            name=account.name,
            institution=InstitutionSchema(id=account.institution_id, name=account.institution_name),
            account_type=AccountTypeSchema(id=account.type_id, name=account.category),
            currency_code=account.currency_code,
            normal_balance_sign=account.normal_balance_sign,
            opened_date=account.opened_date,
            closed_date=account.closed_date,
            first_snapshot_date=activity.first_snapshot_date,
            latest_snapshot_date=activity.latest_snapshot_date,
            latest_balance_minor=activity.latest_balance_minor,
            activity_by_period={
                tag: ActivityDataSchema(values=window.values, delta_minor=window.delta_minor)
                for tag, window in activity.activity_by_period.items()
            },
        )


class SnapshotSchema(BaseModel):
    """Single recorded balance snapshot"""

    id: int
    date: date
    balance_minor: int
    created_at: datetime


class BalancePointSchema(BaseModel):
    date: date
    balance_minor: int


class AllocationSchema(BaseModel):
    account_type: AccountCategory
    balance_minor: int


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    total_balance_minor: int
    change_vs_last_month_pct: float
    monthly_yield_minor: int
    active_accounts: int
    allocation_by_type: List[AllocationSchema]


class SyntheticHistoryResponse(BaseModel):
    """Response for GET /v1/demo/accounts/{account_id}/history"""

    account_id: int
    category: AccountCategory
    start_date: date
    end_date: date
    values: List[int]
