"""Domain model entities for cashbook.

These are pure data classes representing business concepts, independent of
database schema. Records fetched from the store are immutable snapshots; the
daily summary is a nested value object recomputed on demand.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from cashbook.domain.payment_methods import (
    ChannelSplit,
    PaymentMethod,
    normalize_payment_method,
)


class SaleStatus(str, Enum):
    """Point-of-sale status vocabulary."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    AUTHORIZED = "AUTHORIZED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


RECOGNIZED_SALE_STATUSES = (SaleStatus.COMPLETED, SaleStatus.AUTHORIZED)


class CreditOrigin(str, Enum):
    """What a credit grant arose from."""

    SALE = "SALE"
    OTHER = "OTHER"


class TransferDirection(str, Enum):
    """Direction of a bank transfer."""

    INFLOW = "INFLOW"
    OUTFLOW = "OUTFLOW"


class Severity(str, Enum):
    """Alert severity."""

    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class TimeWindow:
    """UTC instant range covering one business day."""

    date: date
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        """Whether an aware instant falls inside the window (both ends inclusive)."""
        return self.start <= instant <= self.end


@dataclass(frozen=True)
class Sale:
    """Sale recorded by the point of sale."""

    id: str
    timestamp: datetime
    total: Decimal
    profit: Decimal
    status: SaleStatus
    customer_name: Optional[str] = None
    invoice_number: Optional[str] = None


@dataclass(frozen=True)
class CreditGrant:
    """Accounts-receivable origination."""

    id: str
    debtor_id: str
    origin: CreditOrigin
    amount: Decimal
    outstanding_balance: Decimal
    status: str
    granted_at: datetime
    sale_id: Optional[str] = None
    debtor_name: Optional[str] = None
    code: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class ReceivablePayment:
    """Payment received against a credit grant."""

    id: str
    amount: Decimal
    method_tag: Optional[str]
    paid_at: datetime
    credit_grant_id: str
    debtor_name: Optional[str] = None
    notes: Optional[str] = None

    @property
    def method(self) -> PaymentMethod:
        return normalize_payment_method(self.method_tag)


@dataclass(frozen=True)
class PayablePayment:
    """Payment made to a supplier."""

    id: str
    amount: Decimal
    method_tag: Optional[str]
    paid_at: datetime
    supplier_name: Optional[str] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    resulting_balance: Optional[Decimal] = None

    @property
    def method(self) -> PaymentMethod:
        return normalize_payment_method(self.method_tag)


@dataclass(frozen=True)
class Expense:
    """Cash expense."""

    id: str
    amount: Decimal
    reason: Optional[str]
    spent_at: datetime
    recorded_by: Optional[str] = None


@dataclass(frozen=True)
class Transfer:
    """Bank transfer in or out of the business account."""

    id: str
    amount: Decimal
    timestamp: datetime
    direction: TransferDirection
    reason: Optional[str] = None


@dataclass(frozen=True)
class BankBalanceSnapshot:
    """Singleton balance of the external bank account."""

    total_amount: Decimal
    updated_at: Optional[datetime]


@dataclass(frozen=True)
class RecorderIdentity:
    """Who recorded an opening or closed a day."""

    id: Optional[str]
    name: Optional[str]
    email: Optional[str]


@dataclass(frozen=True)
class OpeningBalanceRecord:
    """Declared starting cash for a date."""

    id: int
    date: date
    amount: Decimal
    notes: Optional[str]
    recorded_by: Optional[RecorderIdentity]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ClosingDraft:
    """Figures for a closing record that has not been stored yet."""

    date: date
    opening_balance_id: Optional[int]
    sales_total: Decimal
    sales_profit: Decimal
    income_total: Decimal
    outflow_total: Decimal
    receivable_payments_total: Decimal
    transfers_inflow: Decimal
    transfers_outflow: Decimal
    supplier_payments_total: Decimal
    expenses_total: Decimal
    physical_cash_movement: Decimal
    physical_cash_expected: Decimal
    physical_cash_counted: Decimal
    electronic_net: Decimal
    bank_balance_final: Decimal
    notes: Optional[str] = None
    closed_by: Optional[RecorderIdentity] = None


@dataclass(frozen=True)
class ClosingRecord(ClosingDraft):
    """Stored end-of-day reconciliation snapshot."""

    id: int = 0
    created_at: Optional[datetime] = None

    @property
    def difference(self) -> Decimal:
        """Counted cash minus expected cash (negative means a shortage)."""
        return self.physical_cash_counted - self.physical_cash_expected


@dataclass(frozen=True)
class PriorClosingCheck:
    """Result of looking for the latest closing before a date."""

    exists: bool
    record: Optional[ClosingRecord] = None


@dataclass(frozen=True)
class SameDaySettlement:
    """A credit grant with payments received on the same day."""

    grant: CreditGrant
    payments: tuple[ReceivablePayment, ...]
    total_paid: Decimal


@dataclass(frozen=True)
class TransferBreakdown:
    """A day's transfers split by direction."""

    inflows: tuple[Transfer, ...] = ()
    outflows: tuple[Transfer, ...] = ()
    inflow_total: Decimal = Decimal("0")
    outflow_total: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    transfers: tuple[Transfer, ...] = ()


@dataclass(frozen=True)
class SummaryPeriod:
    date: date
    start: datetime
    end: datetime


@dataclass(frozen=True)
class SalesBreakdown:
    total: Decimal
    cash: Decimal
    credit: Decimal
    count: int
    profit: Decimal
    sales: tuple[Sale, ...]
    credit_sales: tuple[Sale, ...]
    cash_sales: tuple[Sale, ...]


@dataclass(frozen=True)
class CreditsBreakdown:
    grants: tuple[CreditGrant, ...]
    count: int
    total: Decimal
    same_day_settlements: tuple[SameDaySettlement, ...]


@dataclass(frozen=True)
class IncomeBreakdown:
    total: Decimal
    sales: Decimal
    receivable_payments: Decimal
    transfers: Decimal
    other: Decimal
    count: int
    receivable_detail: ChannelSplit
    sales_cash: Decimal
    sales_credit: Decimal
    payments: tuple[ReceivablePayment, ...]


@dataclass(frozen=True)
class OutflowBreakdown:
    total: Decimal
    supplier_payments: Decimal
    supplier_detail: ChannelSplit
    expenses: Decimal
    transfers: Decimal
    count: int
    supplier_payment_list: tuple[PayablePayment, ...]
    expense_list: tuple[Expense, ...]


@dataclass(frozen=True)
class PhysicalCash:
    """Movement of the physical cash drawer."""

    sales_income: Decimal
    receivable_income: Decimal
    other_income: Decimal
    supplier_outflow: Decimal
    expense_outflow: Decimal
    total: Decimal


@dataclass(frozen=True)
class ElectronicCash:
    """Same-day movement of bank-held funds and the bank balance."""

    transfer_income: Decimal
    receivable_income: Decimal
    transfer_outflow: Decimal
    supplier_outflow: Decimal
    movement_today: Decimal
    bank_balance: Decimal
    bank_balance_updated_at: Optional[datetime]


@dataclass(frozen=True)
class CashReconciliation:
    expected: Decimal
    physical: PhysicalCash
    electronic: ElectronicCash


@dataclass(frozen=True)
class DailySummary:
    """Aggregated financial summary of one business day."""

    period: SummaryPeriod
    sales: SalesBreakdown
    credits: CreditsBreakdown
    income: IncomeBreakdown
    outflows: OutflowBreakdown
    transfers: TransferBreakdown
    cash: CashReconciliation


@dataclass(frozen=True)
class Alert:
    """Advisory message produced from a daily summary."""

    severity: Severity
    message: str
