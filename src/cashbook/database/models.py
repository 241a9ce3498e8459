"""SQLAlchemy models for cashbook database.

Instants are stored as naive UTC datetimes; the mappers attach the UTC
timezone when converting rows to domain entities.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(12, 2)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Sale(Base):
    """Point-of-sale sale."""

    __tablename__ = "sales"

    id = Column(String, primary_key=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    total = Column(MONEY, nullable=False, default=0)
    profit = Column(MONEY, nullable=False, default=0)
    status = Column(String, nullable=False)
    customer_name = Column(String, nullable=True)
    invoice_number = Column(String, nullable=True)


class CreditGrant(Base):
    """Accounts-receivable origination."""

    __tablename__ = "credit_grants"

    id = Column(String, primary_key=True)
    code = Column(String, nullable=True)
    debtor_id = Column(String, nullable=False)
    debtor_name = Column(String, nullable=True)
    origin = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    outstanding_balance = Column(MONEY, nullable=False, default=0)
    status = Column(String, nullable=False)
    granted_at = Column(DateTime, nullable=False, index=True)
    sale_id = Column(String, ForeignKey("sales.id"), nullable=True)
    reason = Column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("origin IN ('SALE', 'OTHER')", name="ck_credit_grant_origin"),
    )

    payments = relationship("ReceivablePayment", back_populates="credit_grant")


class ReceivablePayment(Base):
    """Payment received against a credit grant."""

    __tablename__ = "receivable_payments"

    id = Column(String, primary_key=True)
    amount = Column(MONEY, nullable=False)
    method_tag = Column(String, nullable=True)
    paid_at = Column(DateTime, nullable=False, index=True)
    credit_grant_id = Column(String, ForeignKey("credit_grants.id"), nullable=False)
    notes = Column(String, nullable=True)

    credit_grant = relationship("CreditGrant", back_populates="payments")


class PayablePayment(Base):
    """Payment made to a supplier."""

    __tablename__ = "payable_payments"

    id = Column(String, primary_key=True)
    amount = Column(MONEY, nullable=False)
    method_tag = Column(String, nullable=True)
    paid_at = Column(DateTime, nullable=False, index=True)
    supplier_name = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    resulting_balance = Column(MONEY, nullable=True)


class Expense(Base):
    """Cash expense."""

    __tablename__ = "expenses"

    id = Column(String, primary_key=True)
    amount = Column(MONEY, nullable=False)
    reason = Column(String, nullable=True)
    spent_at = Column(DateTime, nullable=False, index=True)
    recorded_by = Column(String, nullable=True)


class Transfer(Base):
    """Bank transfer."""

    __tablename__ = "transfers"

    id = Column(String, primary_key=True)
    amount = Column(MONEY, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)
    direction = Column(String, nullable=False)
    reason = Column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("direction IN ('INFLOW', 'OUTFLOW')", name="ck_transfer_direction"),
    )


class BankBalance(Base):
    """Singleton bank balance row (id = 1)."""

    __tablename__ = "bank_balance"

    id = Column(Integer, primary_key=True)
    total_amount = Column(MONEY, nullable=False, default=0)
    updated_at = Column(DateTime, nullable=True)


class OpeningBalance(Base):
    """Opening cash declared for a date."""

    __tablename__ = "opening_balances"

    id = Column(Integer, primary_key=True)
    date = Column(Date, unique=True, nullable=False)
    amount = Column(MONEY, nullable=False)
    notes = Column(String, nullable=True)
    recorded_by_id = Column(String, nullable=True)
    recorded_by_name = Column(String, nullable=True)
    recorded_by_email = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    closings = relationship("Closing", back_populates="opening_balance")


class Closing(Base):
    """End-of-day reconciliation snapshot."""

    __tablename__ = "closings"

    id = Column(Integer, primary_key=True)
    # One closing per date; a second insert for the same date fails.
    date = Column(Date, unique=True, nullable=False)
    opening_balance_id = Column(Integer, ForeignKey("opening_balances.id"), nullable=False)
    sales_total = Column(MONEY, nullable=False)
    sales_profit = Column(MONEY, nullable=False)
    income_total = Column(MONEY, nullable=False)
    outflow_total = Column(MONEY, nullable=False)
    receivable_payments_total = Column(MONEY, nullable=False)
    transfers_inflow = Column(MONEY, nullable=False)
    transfers_outflow = Column(MONEY, nullable=False)
    supplier_payments_total = Column(MONEY, nullable=False)
    expenses_total = Column(MONEY, nullable=False)
    physical_cash_movement = Column(MONEY, nullable=False)
    physical_cash_expected = Column(MONEY, nullable=False)
    physical_cash_counted = Column(MONEY, nullable=False)
    electronic_net = Column(MONEY, nullable=False)
    bank_balance_final = Column(MONEY, nullable=False)
    notes = Column(String, nullable=True)
    closed_by_id = Column(String, nullable=True)
    closed_by_name = Column(String, nullable=True)
    closed_by_email = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    opening_balance = relationship("OpeningBalance", back_populates="closings")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
