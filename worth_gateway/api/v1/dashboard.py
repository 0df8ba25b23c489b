"""GET /v1/dashboard - portfolio totals and net worth history"""

import time
from typing import List
from fastapi import APIRouter, Depends, Query

from worth_gateway.api.dependencies import get_balance_service, get_demo_mode, get_request_id
from worth_gateway.api.v1.schemas import AllocationSchema, BalancePointSchema, DashboardResponse
from worth_gateway.services.balances import DASHBOARD_POINTS, BalanceService
from worth_gateway.infrastructure.observability.logging import log_series_request
from worth_gateway.infrastructure.observability.metrics import record_series
from worth_gateway.utils.date_utils import BalancePeriod

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    service: BalanceService = Depends(get_balance_service),
    request_id: str = Depends(get_request_id),
    demo_mode: bool = Depends(get_demo_mode),
):
    """Total balance, active accounts, allocation and month-on-month change"""
    start_time = time.time()
    summary = service.dashboard()

    record_series("dashboard", DASHBOARD_POINTS)
    log_series_request(request_id, "dashboard", DASHBOARD_POINTS, (time.time() - start_time) * 1000, demo_mode)

    return DashboardResponse(
        total_balance_minor=summary.total_balance_minor,
        change_vs_last_month_pct=summary.change_vs_last_month_pct,
        monthly_yield_minor=summary.monthly_yield_minor,
        active_accounts=summary.active_accounts,
        allocation_by_type=[
            AllocationSchema(account_type=s.category, balance_minor=s.balance_minor)
            for s in summary.allocation_by_type
        ],
    )


@router.get("/dashboard/balance", response_model=List[BalancePointSchema])
def get_portfolio_balance_over_time(
    period: BalancePeriod = Query(BalancePeriod.ONE_MONTH, description="Lookback period"),
    service: BalanceService = Depends(get_balance_service),
    request_id: str = Depends(get_request_id),
    demo_mode: bool = Depends(get_demo_mode),
):
    """
    Net worth per day across all accounts.

    Days before an account's first snapshot count as zero for that account.
    """
    start_time = time.time()
    points = service.portfolio_balance_over_time(period)

    record_series("portfolio_balance", len(points))
    log_series_request(request_id, "portfolio_balance", len(points), (time.time() - start_time) * 1000, demo_mode)

    return [BalancePointSchema(date=p.date, balance_minor=p.balance_minor) for p in points]
