"""GET /v1/accounts - per-account activity, snapshots and balance history"""

import time
from typing import List
from fastapi import APIRouter, Depends, Query

from worth_gateway.api.dependencies import get_balance_service, get_demo_mode, get_request_id
from worth_gateway.api.v1.schemas import AccountResponse, BalancePointSchema, SnapshotSchema
from worth_gateway.services.balances import BalanceService
from worth_gateway.domain.activity import FULL_WINDOW_DAYS
from worth_gateway.infrastructure.observability.logging import log_series_request
from worth_gateway.infrastructure.observability.metrics import record_series
from worth_gateway.utils.date_utils import BalancePeriod

router = APIRouter()


@router.get("/accounts", response_model=List[AccountResponse])
def list_accounts(
    service: BalanceService = Depends(get_balance_service),
    request_id: str = Depends(get_request_id),
    demo_mode: bool = Depends(get_demo_mode),
):
    """
    List all accounts with 1W/1M/3M/6M activity windows.

    Every window is a suffix of the same 180-day series, so overlapping
    windows agree on shared days.
    """
    start_time = time.time()
    activities = service.list_accounts()

    record_series("accounts", FULL_WINDOW_DAYS)
    log_series_request(request_id, "accounts", FULL_WINDOW_DAYS, (time.time() - start_time) * 1000, demo_mode)

    return [AccountResponse.from_activity(a) for a in activities]


@router.get("/accounts/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    service: BalanceService = Depends(get_balance_service),
    request_id: str = Depends(get_request_id),
    demo_mode: bool = Depends(get_demo_mode),
):
    """Single account with activity windows"""
    start_time = time.time()
    activity = service.get_account(account_id)

    record_series("account", FULL_WINDOW_DAYS)
    log_series_request(request_id, "account", FULL_WINDOW_DAYS, (time.time() - start_time) * 1000, demo_mode)

    return AccountResponse.from_activity(activity)


@router.get("/accounts/{account_id}/snapshots", response_model=List[SnapshotSchema])
def list_account_snapshots(
    account_id: int,
    service: BalanceService = Depends(get_balance_service),
):
    """Recorded snapshots for one account, newest first"""
    return [
        SnapshotSchema(id=s.id, date=s.date, balance_minor=s.balance_minor, created_at=s.created_at)
        for s in service.account_snapshots(account_id)
    ]


@router.get("/accounts/{account_id}/balance", response_model=List[BalancePointSchema])
def get_account_balance_over_time(
    account_id: int,
    period: BalancePeriod = Query(BalancePeriod.ONE_MONTH, description="Lookback period"),
    service: BalanceService = Depends(get_balance_service),
    request_id: str = Depends(get_request_id),
    demo_mode: bool = Depends(get_demo_mode),
):
    """
    Daily balance for one account.

    Returns:
        One point per day from max(period start, first snapshot) to today
    """
    start_time = time.time()
    points = service.account_balance_over_time(account_id, period)

    record_series("account_balance", len(points))
    log_series_request(request_id, "account_balance", len(points), (time.time() - start_time) * 1000, demo_mode)

    return [BalancePointSchema(date=p.date, balance_minor=p.balance_minor) for p in points]
