"""Opening balance and daily closing domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from cashbook.database.base import Collection, Database, Ordering, Predicate
from cashbook.domain.entities import (
    ClosingDraft,
    ClosingRecord,
    DailySummary,
    OpeningBalanceRecord,
    PriorClosingCheck,
    RecorderIdentity,
)
from cashbook.domain.errors import RetrievalError, ValidationError
from cashbook.domain.time_window import DateInput, to_calendar_date
from cashbook.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


class BalanceService:
    """Service for opening balances and daily closings.

    Reads degrade to "absent" when the store fails; writes surface
    PersistenceError to the caller.
    """

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_opening(self, day: DateInput) -> Optional[OpeningBalanceRecord]:
        """Get the opening balance for a date.

        Args:
            day: Calendar date

        Returns:
            OpeningBalanceRecord or None if none was recorded
        """
        day = to_calendar_date(day)
        try:
            records = self.db.query(
                Collection.OPENING_BALANCES,
                predicates=(Predicate.eq("date", day),),
                limit=1,
            )
        except RetrievalError as e:
            logger.warning("Could not fetch opening balance for %s: %s", day.isoformat(), e)
            return None
        return records[0] if records else None

    def upsert_opening(
        self,
        day: DateInput,
        amount: Decimal,
        notes: Optional[str] = None,
        recorded_by: Optional[RecorderIdentity] = None,
    ) -> OpeningBalanceRecord:
        """Record the opening cash for a date, overwriting any previous value.

        Args:
            day: Calendar date
            amount: Declared starting cash
            notes: Optional notes
            recorded_by: Identity stamped on the record

        Returns:
            The stored OpeningBalanceRecord

        Raises:
            ValidationError: If the amount is negative
            PersistenceError: If the store rejects the write
        """
        day = to_calendar_date(day)
        amount = to_decimal(amount)
        if amount < 0:
            raise ValidationError(f"Opening balance cannot be negative: {amount}")
        record = self.db.upsert_opening_balance(
            day=day, amount=amount, notes=notes or None, recorded_by=recorded_by
        )
        logger.info("Opening balance for %s set to %s", day.isoformat(), amount)
        return record

    def get_closing(self, day: DateInput) -> Optional[ClosingRecord]:
        """Get the closing record for a date, or None."""
        day = to_calendar_date(day)
        try:
            records = self.db.query(
                Collection.CLOSINGS,
                predicates=(Predicate.eq("date", day),),
                limit=1,
            )
        except RetrievalError as e:
            logger.warning("Could not fetch closing for %s: %s", day.isoformat(), e)
            return None
        return records[0] if records else None

    def get_closing_range(self, start: DateInput, end: DateInput) -> list[ClosingRecord]:
        """Get closings between two dates (inclusive), ascending by date.

        Raises:
            ValidationError: If start is after end
        """
        start = to_calendar_date(start)
        end = to_calendar_date(end)
        if start > end:
            raise ValidationError(
                f"Start date {start.isoformat()} is after end date {end.isoformat()}"
            )
        try:
            return self.db.query(
                Collection.CLOSINGS,
                predicates=(Predicate.gte("date", start), Predicate.lte("date", end)),
                order_by=Ordering("date"),
            )
        except RetrievalError as e:
            logger.warning("Could not fetch closings from %s to %s: %s", start, end, e)
            return []

    def has_prior_closing(self, day: DateInput) -> PriorClosingCheck:
        """Find the most recent closing strictly before a date."""
        day = to_calendar_date(day)
        try:
            records = self.db.query(
                Collection.CLOSINGS,
                predicates=(Predicate.lt("date", day),),
                order_by=Ordering("date", descending=True),
                limit=1,
            )
        except RetrievalError as e:
            logger.warning("Could not check closings before %s: %s", day.isoformat(), e)
            return PriorClosingCheck(exists=False)
        if not records:
            return PriorClosingCheck(exists=False)
        return PriorClosingCheck(exists=True, record=records[0])

    def build_closing(
        self,
        summary: DailySummary,
        opening: Optional[OpeningBalanceRecord],
        counted_cash: Decimal,
        notes: Optional[str] = None,
        closed_by: Optional[RecorderIdentity] = None,
    ) -> ClosingDraft:
        """Snapshot a summary into a closing draft.

        Expected physical cash is the opening cash plus the day's physical
        cash movement.

        Raises:
            ValidationError: If counted cash is negative or the opening
                belongs to another date
        """
        counted_cash = to_decimal(counted_cash)
        if counted_cash < 0:
            raise ValidationError(f"Counted cash cannot be negative: {counted_cash}")
        day: date = summary.period.date
        if opening is not None and opening.date != day:
            raise ValidationError(
                f"Opening balance is for {opening.date.isoformat()}, not {day.isoformat()}"
            )

        opening_amount = opening.amount if opening is not None else ZERO
        physical = summary.cash.physical.total
        return ClosingDraft(
            date=day,
            opening_balance_id=opening.id if opening is not None else None,
            sales_total=summary.sales.total,
            sales_profit=summary.sales.profit,
            income_total=summary.income.total,
            outflow_total=summary.outflows.total,
            receivable_payments_total=summary.income.receivable_payments,
            transfers_inflow=summary.transfers.inflow_total,
            transfers_outflow=summary.transfers.outflow_total,
            supplier_payments_total=summary.outflows.supplier_payments,
            expenses_total=summary.outflows.expenses,
            physical_cash_movement=physical,
            physical_cash_expected=opening_amount + physical,
            physical_cash_counted=counted_cash,
            electronic_net=summary.cash.electronic.movement_today,
            bank_balance_final=summary.cash.electronic.bank_balance,
            notes=notes or None,
            closed_by=closed_by,
        )

    def create_closing(self, draft: ClosingDraft) -> ClosingRecord:
        """Store a closing record (append-only).

        Raises:
            PersistenceError: If the opening linkage is absent or the store
                rejects the write
            ClosingConflictError: If the date is already closed
        """
        return self.db.create_closing(draft)
