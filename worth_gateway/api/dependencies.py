"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from worth_gateway.config import settings
from worth_gateway.infrastructure.database.repositories import AccountRepository, SnapshotRepository
from worth_gateway.infrastructure.database.session import get_db
from worth_gateway.services.balances import BalanceService, MissingSnapshotDefaults
from worth_gateway.services.demo import SyntheticSnapshotSource


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference day for all trailing windows"""
    return date.today()


def get_demo_mode() -> bool:
    return settings.demo_mode


def get_defaults() -> MissingSnapshotDefaults:
    """Fallback policy for accounts without any snapshot"""
    return MissingSnapshotDefaults(use_today_for_dates=True, balance_minor=settings.missing_balance_minor)


def get_balance_service(
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    demo_mode: bool = Depends(get_demo_mode),
    defaults: MissingSnapshotDefaults = Depends(get_defaults),
) -> BalanceService:
    """Provide a per-request balance service over stored or synthesized snapshots"""
    accounts = AccountRepository(db)
    if demo_mode:
        source = SyntheticSnapshotSource(accounts, today, defaults)
        return BalanceService(source, source, today, defaults)
    return BalanceService(accounts, SnapshotRepository(db), today, defaults)
