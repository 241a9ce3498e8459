"""Daily financial summary domain service."""

import logging
from typing import Optional, Sequence

from cashbook.database.base import Database
from cashbook.domain.correlator import find_same_day_settlements
from cashbook.domain.entities import (
    BankBalanceSnapshot,
    CashReconciliation,
    CreditGrant,
    CreditOrigin,
    CreditsBreakdown,
    DailySummary,
    ElectronicCash,
    Expense,
    IncomeBreakdown,
    OutflowBreakdown,
    PayablePayment,
    PhysicalCash,
    ReceivablePayment,
    Sale,
    SalesBreakdown,
    SummaryPeriod,
    TimeWindow,
    TransferBreakdown,
)
from cashbook.domain.fetchers import RecordFetcher
from cashbook.domain.payment_methods import (
    classify_payable,
    classify_receivable,
    split_by_channel,
)
from cashbook.domain.time_window import DateInput, resolve_time_window
from cashbook.utils.money import ZERO, decimal_sum

logger = logging.getLogger(__name__)

# No other income source exists yet; kept as a separate line of income.
OTHER_INCOME = ZERO


def credit_sale_ids(grants: Sequence[CreditGrant]) -> set[str]:
    """Ids of sales that were granted on credit."""
    return {
        grant.sale_id
        for grant in grants
        if grant.origin == CreditOrigin.SALE and grant.sale_id
    }


def aggregate_daily_summary(
    window: TimeWindow,
    sales: Sequence[Sale],
    grants: Sequence[CreditGrant],
    receivable_payments: Sequence[ReceivablePayment],
    payable_payments: Sequence[PayablePayment],
    expenses: Sequence[Expense],
    transfers: TransferBreakdown,
    bank_snapshot: Optional[BankBalanceSnapshot],
) -> DailySummary:
    """Aggregate one day's records into a DailySummary.

    Pure function: every figure is derived from the arguments alone.

    Args:
        window: The business day being summarized
        sales: Recognized sales of the day
        grants: Credit grants issued on the day
        receivable_payments: Payments received from debtors
        payable_payments: Payments made to suppliers
        expenses: Expenses of the day
        transfers: The day's transfers split by direction
        bank_snapshot: Current bank balance, or None when unavailable

    Returns:
        DailySummary
    """
    # Sales: a sale is on credit iff a SALE-origin grant points at it.
    on_credit = credit_sale_ids(grants)
    credit_sales = tuple(s for s in sales if s.id in on_credit)
    cash_sales = tuple(s for s in sales if s.id not in on_credit)
    sales_total = decimal_sum(s.total for s in sales)
    sales_credit = decimal_sum(s.total for s in credit_sales)
    sales_cash = decimal_sum(s.total for s in cash_sales)
    sales_breakdown = SalesBreakdown(
        total=sales_total,
        cash=sales_cash,
        credit=sales_credit,
        count=len(sales),
        profit=decimal_sum(s.profit for s in sales),
        sales=tuple(sales),
        credit_sales=credit_sales,
        cash_sales=cash_sales,
    )

    receivables = split_by_channel(
        receivable_payments,
        amount=lambda p: p.amount,
        method=lambda p: p.method,
        classify=classify_receivable,
    )
    payables = split_by_channel(
        payable_payments,
        amount=lambda p: p.amount,
        method=lambda p: p.method,
        classify=classify_payable,
    )
    expense_total = decimal_sum(e.amount for e in expenses)

    income = IncomeBreakdown(
        total=sales_total + receivables.total + transfers.inflow_total + OTHER_INCOME,
        sales=sales_total,
        receivable_payments=receivables.total,
        transfers=transfers.inflow_total,
        other=OTHER_INCOME,
        count=len(sales) + len(receivable_payments) + len(transfers.transfers),
        receivable_detail=receivables,
        sales_cash=sales_cash,
        sales_credit=sales_credit,
        payments=tuple(receivable_payments),
    )

    outflows = OutflowBreakdown(
        total=payables.total + expense_total + transfers.outflow_total,
        supplier_payments=payables.total,
        supplier_detail=payables,
        expenses=expense_total,
        transfers=transfers.outflow_total,
        count=len(payable_payments) + len(expenses) + len(transfers.outflows),
        supplier_payment_list=tuple(payable_payments),
        expense_list=tuple(expenses),
    )

    # Expenses are always paid from the drawer.
    physical = PhysicalCash(
        sales_income=sales_cash,
        receivable_income=receivables.cash,
        other_income=OTHER_INCOME,
        supplier_outflow=payables.cash,
        expense_outflow=expense_total,
        total=(sales_cash + receivables.cash + OTHER_INCOME)
        - (payables.cash + expense_total),
    )

    bank_balance = bank_snapshot.total_amount if bank_snapshot is not None else ZERO
    electronic = ElectronicCash(
        transfer_income=transfers.inflow_total,
        receivable_income=receivables.electronic,
        transfer_outflow=transfers.outflow_total,
        supplier_outflow=payables.electronic,
        movement_today=(transfers.inflow_total + receivables.electronic)
        - (transfers.outflow_total + payables.electronic),
        bank_balance=bank_balance,
        bank_balance_updated_at=bank_snapshot.updated_at if bank_snapshot else None,
    )

    # Drawer movement plus the bank balance (two custody pools in one figure).
    cash = CashReconciliation(
        expected=physical.total + bank_balance,
        physical=physical,
        electronic=electronic,
    )

    credits = CreditsBreakdown(
        grants=tuple(grants),
        count=len(grants),
        total=decimal_sum(g.amount for g in grants),
        same_day_settlements=tuple(
            find_same_day_settlements(grants, receivable_payments)
        ),
    )

    return DailySummary(
        period=SummaryPeriod(date=window.date, start=window.start, end=window.end),
        sales=sales_breakdown,
        credits=credits,
        income=income,
        outflows=outflows,
        transfers=transfers,
        cash=cash,
    )


class DailySummaryService:
    """Service for computing the daily financial summary."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.fetcher = RecordFetcher(db)

    def compute(self, target_date: DateInput) -> DailySummary:
        """Compute the summary for a business day.

        Record fetches run one after the other; a failing category counts as
        empty.

        Args:
            target_date: Date, datetime or date string of the day

        Returns:
            DailySummary for the day

        Raises:
            InvalidDateError: If target_date is not a valid calendar date
        """
        window = resolve_time_window(target_date)
        day = window.date.isoformat()

        sales = self.fetcher.fetch_sales(window)
        grants = self.fetcher.fetch_credit_grants(window)
        receivable_payments = self.fetcher.fetch_receivable_payments(window)
        payable_payments = self.fetcher.fetch_payable_payments(window)
        expenses = self.fetcher.fetch_expenses(window)
        transfers = self.fetcher.fetch_transfers(window)
        bank_snapshot = self.fetcher.fetch_bank_balance()

        logger.info(
            "Records for %s: sales=%d credits=%d receivable_payments=%d "
            "payable_payments=%d expenses=%d transfers=%d",
            day,
            len(sales),
            len(grants),
            len(receivable_payments),
            len(payable_payments),
            len(expenses),
            len(transfers.transfers),
        )

        summary = aggregate_daily_summary(
            window=window,
            sales=sales,
            grants=grants,
            receivable_payments=receivable_payments,
            payable_payments=payable_payments,
            expenses=expenses,
            transfers=transfers,
            bank_snapshot=bank_snapshot,
        )

        logger.info(
            "Summary for %s: income=%s sales=%s outflows=%s physical=%s electronic=%s expected=%s",
            day,
            summary.income.total,
            summary.sales.total,
            summary.outflows.total,
            summary.cash.physical.total,
            summary.cash.electronic.movement_today,
            summary.cash.expected,
        )
        return summary
