"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: naive UTC columns become aware
datetimes, status strings become enums, and amounts become Decimals.
"""

from datetime import datetime, timezone
from typing import Optional

from cashbook.domain import entities as domain
from cashbook.database.models import (
    BankBalance as ORMBankBalance,
    Closing as ORMClosing,
    CreditGrant as ORMCreditGrant,
    Expense as ORMExpense,
    OpeningBalance as ORMOpeningBalance,
    PayablePayment as ORMPayablePayment,
    ReceivablePayment as ORMReceivablePayment,
    Sale as ORMSale,
    Transfer as ORMTransfer,
)
from cashbook.utils.money import to_decimal


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive stored datetime."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_datetime(value: datetime) -> datetime:
    """Convert an aware datetime to the naive UTC form stored in the database."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _identity(
    identity_id: Optional[str], name: Optional[str], email: Optional[str]
) -> Optional[domain.RecorderIdentity]:
    if identity_id is None and name is None and email is None:
        return None
    return domain.RecorderIdentity(id=identity_id, name=name, email=email)


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        timestamp=as_utc(orm_sale.timestamp),
        total=to_decimal(orm_sale.total),
        profit=to_decimal(orm_sale.profit),
        status=domain.SaleStatus(orm_sale.status),
        customer_name=orm_sale.customer_name,
        invoice_number=orm_sale.invoice_number,
    )


def credit_grant_to_domain(orm_grant: ORMCreditGrant) -> domain.CreditGrant:
    """Convert SQLAlchemy CreditGrant model to domain CreditGrant entity."""
    return domain.CreditGrant(
        id=orm_grant.id,
        debtor_id=orm_grant.debtor_id,
        origin=domain.CreditOrigin(orm_grant.origin),
        amount=to_decimal(orm_grant.amount),
        outstanding_balance=to_decimal(orm_grant.outstanding_balance),
        status=orm_grant.status,
        granted_at=as_utc(orm_grant.granted_at),
        sale_id=orm_grant.sale_id,
        debtor_name=orm_grant.debtor_name,
        code=orm_grant.code,
        reason=orm_grant.reason,
    )


def receivable_payment_to_domain(
    orm_payment: ORMReceivablePayment,
) -> domain.ReceivablePayment:
    """Convert SQLAlchemy ReceivablePayment model to domain entity."""
    grant = orm_payment.credit_grant
    return domain.ReceivablePayment(
        id=orm_payment.id,
        amount=to_decimal(orm_payment.amount),
        method_tag=orm_payment.method_tag,
        paid_at=as_utc(orm_payment.paid_at),
        credit_grant_id=orm_payment.credit_grant_id,
        debtor_name=grant.debtor_name if grant is not None else None,
        notes=orm_payment.notes,
    )


def payable_payment_to_domain(orm_payment: ORMPayablePayment) -> domain.PayablePayment:
    """Convert SQLAlchemy PayablePayment model to domain entity."""
    return domain.PayablePayment(
        id=orm_payment.id,
        amount=to_decimal(orm_payment.amount),
        method_tag=orm_payment.method_tag,
        paid_at=as_utc(orm_payment.paid_at),
        supplier_name=orm_payment.supplier_name,
        reference=orm_payment.reference,
        notes=orm_payment.notes,
        resulting_balance=(
            to_decimal(orm_payment.resulting_balance)
            if orm_payment.resulting_balance is not None
            else None
        ),
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        amount=to_decimal(orm_expense.amount),
        reason=orm_expense.reason,
        spent_at=as_utc(orm_expense.spent_at),
        recorded_by=orm_expense.recorded_by,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        amount=to_decimal(orm_transfer.amount),
        timestamp=as_utc(orm_transfer.timestamp),
        direction=domain.TransferDirection(orm_transfer.direction),
        reason=orm_transfer.reason,
    )


def bank_balance_to_domain(orm_balance: ORMBankBalance) -> domain.BankBalanceSnapshot:
    """Convert the bank balance row to a domain snapshot."""
    return domain.BankBalanceSnapshot(
        total_amount=to_decimal(orm_balance.total_amount),
        updated_at=as_utc(orm_balance.updated_at),
    )


def opening_balance_to_domain(
    orm_opening: ORMOpeningBalance,
) -> domain.OpeningBalanceRecord:
    """Convert SQLAlchemy OpeningBalance model to domain entity."""
    return domain.OpeningBalanceRecord(
        id=orm_opening.id,
        date=orm_opening.date,
        amount=to_decimal(orm_opening.amount),
        notes=orm_opening.notes,
        recorded_by=_identity(
            orm_opening.recorded_by_id,
            orm_opening.recorded_by_name,
            orm_opening.recorded_by_email,
        ),
        created_at=as_utc(orm_opening.created_at),
        updated_at=as_utc(orm_opening.updated_at),
    )


def closing_to_domain(orm_closing: ORMClosing) -> domain.ClosingRecord:
    """Convert SQLAlchemy Closing model to domain ClosingRecord entity."""
    return domain.ClosingRecord(
        id=orm_closing.id,
        date=orm_closing.date,
        opening_balance_id=orm_closing.opening_balance_id,
        sales_total=to_decimal(orm_closing.sales_total),
        sales_profit=to_decimal(orm_closing.sales_profit),
        income_total=to_decimal(orm_closing.income_total),
        outflow_total=to_decimal(orm_closing.outflow_total),
        receivable_payments_total=to_decimal(orm_closing.receivable_payments_total),
        transfers_inflow=to_decimal(orm_closing.transfers_inflow),
        transfers_outflow=to_decimal(orm_closing.transfers_outflow),
        supplier_payments_total=to_decimal(orm_closing.supplier_payments_total),
        expenses_total=to_decimal(orm_closing.expenses_total),
        physical_cash_movement=to_decimal(orm_closing.physical_cash_movement),
        physical_cash_expected=to_decimal(orm_closing.physical_cash_expected),
        physical_cash_counted=to_decimal(orm_closing.physical_cash_counted),
        electronic_net=to_decimal(orm_closing.electronic_net),
        bank_balance_final=to_decimal(orm_closing.bank_balance_final),
        notes=orm_closing.notes,
        closed_by=_identity(
            orm_closing.closed_by_id,
            orm_closing.closed_by_name,
            orm_closing.closed_by_email,
        ),
        created_at=as_utc(orm_closing.created_at),
    )


def closing_draft_to_orm(draft: domain.ClosingDraft) -> ORMClosing:
    """Build a SQLAlchemy Closing row from a domain draft."""
    closed_by = draft.closed_by
    return ORMClosing(
        date=draft.date,
        opening_balance_id=draft.opening_balance_id,
        sales_total=draft.sales_total,
        sales_profit=draft.sales_profit,
        income_total=draft.income_total,
        outflow_total=draft.outflow_total,
        receivable_payments_total=draft.receivable_payments_total,
        transfers_inflow=draft.transfers_inflow,
        transfers_outflow=draft.transfers_outflow,
        supplier_payments_total=draft.supplier_payments_total,
        expenses_total=draft.expenses_total,
        physical_cash_movement=draft.physical_cash_movement,
        physical_cash_expected=draft.physical_cash_expected,
        physical_cash_counted=draft.physical_cash_counted,
        electronic_net=draft.electronic_net,
        bank_balance_final=draft.bank_balance_final,
        notes=draft.notes,
        closed_by_id=closed_by.id if closed_by else None,
        closed_by_name=closed_by.name if closed_by else None,
        closed_by_email=closed_by.email if closed_by else None,
    )
