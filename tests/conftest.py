"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from worth_gateway.api.main import create_app
from worth_gateway.api.dependencies import get_demo_mode, get_today
from worth_gateway.infrastructure.database.models import (
    Account,
    AccountBalanceSnapshot,
    AccountType,
    Base,
    Institution,
)
from worth_gateway.infrastructure.database.session import get_db
from worth_gateway.domain.models import AccountCategory


# Fixed reference day so trailing windows are reproducible
TODAY = date(2024, 6, 30)

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_accounts(db: Session) -> Dict[str, int]:
    """
    Three accounts at one institution:
    - current: seeded before the 180-day window, updated 10 and 3 days ago
    - credit card: first snapshot 20 days ago, updated today
    - savings: no snapshots at all
    """
    bank = Institution(name="Northbank")
    db.add(bank)
    types = {category: AccountType(name=category.value) for category in AccountCategory}
    db.add_all(types.values())
    db.flush()

    current = Account(
        name="Current",
        institution_id=bank.id,
        type_id=types[AccountCategory.CURRENT].id,
        currency_code="GBP",
        normal_balance_sign=1,
        opened_date=days_ago(400),
    )
    card = Account(
        name="Credit Card",
        institution_id=bank.id,
        type_id=types[AccountCategory.CREDIT_CARD].id,
        currency_code="GBP",
        normal_balance_sign=-1,
    )
    savings = Account(
        name="Savings",
        institution_id=bank.id,
        type_id=types[AccountCategory.SAVINGS].id,
        currency_code="GBP",
        normal_balance_sign=1,
    )
    db.add_all([current, card, savings])
    db.flush()

    db.add_all(
        [
            AccountBalanceSnapshot(account_id=current.id, balance_date=days_ago(200), balance_minor=50_000),
            AccountBalanceSnapshot(account_id=current.id, balance_date=days_ago(10), balance_minor=60_000),
            AccountBalanceSnapshot(account_id=current.id, balance_date=days_ago(3), balance_minor=65_000),
            AccountBalanceSnapshot(account_id=card.id, balance_date=days_ago(20), balance_minor=-12_000),
            AccountBalanceSnapshot(account_id=card.id, balance_date=TODAY, balance_minor=-15_000),
        ]
    )
    db.commit()

    return {"current": current.id, "card": card.id, "savings": savings.id}


def _build_client(db: Session, demo_mode: bool) -> TestClient:
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_demo_mode] = lambda: demo_mode
    return TestClient(app)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    return _build_client(db, demo_mode=False)


@pytest.fixture
def demo_client(db: Session) -> TestClient:
    """Test client serving synthesized histories"""
    return _build_client(db, demo_mode=True)
