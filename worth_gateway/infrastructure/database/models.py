"""SQLAlchemy ORM models for accounts and balance snapshots"""

from sqlalchemy import BigInteger, CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Institution(Base):
    """Bank or provider holding accounts"""

    __tablename__ = "institutions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)

    accounts = relationship("Account", back_populates="institution")


class AccountType(Base):
    """Account category lookup keyed by unique name"""

    __tablename__ = "account_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)

    accounts = relationship("Account", back_populates="account_type")


class Account(Base):
    """Tracked account"""

    __tablename__ = "accounts"
    __table_args__ = (CheckConstraint("normal_balance_sign IN (1, -1)", name="ck_accounts_sign"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    institution_id = Column(Integer, ForeignKey("institutions.id"), nullable=False)
    type_id = Column(Integer, ForeignKey("account_types.id"), nullable=False)
    currency_code = Column(Text, nullable=False, default="GBP")
    normal_balance_sign = Column(Integer, nullable=False, default=1)
    opened_date = Column(Date, nullable=True)
    closed_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    institution = relationship("Institution", back_populates="accounts")
    account_type = relationship("AccountType", back_populates="accounts")
    snapshots = relationship("AccountBalanceSnapshot", back_populates="account", cascade="all, delete-orphan")


class AccountBalanceSnapshot(Base):
    """Balance observed for an account on one calendar date"""

    __tablename__ = "account_balance_snapshots"
    __table_args__ = (UniqueConstraint("account_id", "balance_date", name="uq_snapshot_account_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    balance_date = Column(Date, nullable=False, index=True)
    balance_minor = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    account = relationship("Account", back_populates="snapshots")
