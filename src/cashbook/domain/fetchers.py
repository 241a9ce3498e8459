"""Record fetchers for one business day.

Every fetcher degrades to an empty result when the store fails, so a single
broken category never aborts the daily summary.
"""

import logging
from typing import Any, Optional

from cashbook.database.base import Collection, Database, Ordering, Predicate
from cashbook.domain.entities import (
    RECOGNIZED_SALE_STATUSES,
    BankBalanceSnapshot,
    CreditGrant,
    Expense,
    PayablePayment,
    ReceivablePayment,
    Sale,
    TimeWindow,
    TransferBreakdown,
    TransferDirection,
)
from cashbook.domain.errors import RetrievalError
from cashbook.utils.money import decimal_sum

logger = logging.getLogger(__name__)


class RecordFetcher:
    """Fetches a day's records, one category at a time."""

    def __init__(self, db: Database):
        """Initialize record fetcher.

        Args:
            db: Database instance
        """
        self.db = db

    def _fetch_window(
        self,
        collection: Collection,
        timestamp_field: str,
        window: TimeWindow,
        extra: tuple[Predicate, ...] = (),
    ) -> list[Any]:
        predicates = (
            Predicate.gte(timestamp_field, window.start),
            Predicate.lte(timestamp_field, window.end),
        ) + extra
        try:
            records = self.db.query(
                collection,
                predicates=predicates,
                order_by=Ordering(timestamp_field, descending=True),
            )
        except RetrievalError as e:
            logger.warning(
                "Could not fetch %s for %s: %s", collection.value, window.date.isoformat(), e
            )
            return []
        logger.debug("Fetched %d %s for %s", len(records), collection.value, window.date.isoformat())
        return records

    def fetch_sales(self, window: TimeWindow) -> list[Sale]:
        """Sales with a recognized status (COMPLETED, AUTHORIZED) in the window."""
        return self._fetch_window(
            Collection.SALES,
            "timestamp",
            window,
            extra=(Predicate.is_in("status", RECOGNIZED_SALE_STATUSES),),
        )

    def fetch_credit_grants(self, window: TimeWindow) -> list[CreditGrant]:
        """Credit grants issued in the window."""
        return self._fetch_window(Collection.CREDIT_GRANTS, "granted_at", window)

    def fetch_receivable_payments(self, window: TimeWindow) -> list[ReceivablePayment]:
        """Payments received from debtors in the window."""
        return self._fetch_window(Collection.RECEIVABLE_PAYMENTS, "paid_at", window)

    def fetch_payable_payments(self, window: TimeWindow) -> list[PayablePayment]:
        """Payments made to suppliers in the window."""
        return self._fetch_window(Collection.PAYABLE_PAYMENTS, "paid_at", window)

    def fetch_expenses(self, window: TimeWindow) -> list[Expense]:
        """Expenses recorded in the window."""
        return self._fetch_window(Collection.EXPENSES, "spent_at", window)

    def fetch_transfers(self, window: TimeWindow) -> TransferBreakdown:
        """Transfers in the window, split by direction with subtotals."""
        try:
            transfers = self.db.query(
                Collection.TRANSFERS,
                predicates=(
                    Predicate.gte("timestamp", window.start),
                    Predicate.lte("timestamp", window.end),
                ),
                order_by=Ordering("timestamp", descending=True),
            )
        except RetrievalError as e:
            logger.warning("Could not fetch transfers for %s: %s", window.date.isoformat(), e)
            return TransferBreakdown()

        inflows = tuple(t for t in transfers if t.direction == TransferDirection.INFLOW)
        outflows = tuple(t for t in transfers if t.direction == TransferDirection.OUTFLOW)
        inflow_total = decimal_sum(t.amount for t in inflows)
        outflow_total = decimal_sum(t.amount for t in outflows)
        return TransferBreakdown(
            inflows=inflows,
            outflows=outflows,
            inflow_total=inflow_total,
            outflow_total=outflow_total,
            net=inflow_total - outflow_total,
            transfers=tuple(transfers),
        )

    def fetch_bank_balance(self) -> Optional[BankBalanceSnapshot]:
        """Current bank balance snapshot, or None if unavailable."""
        try:
            return self.db.get_bank_balance()
        except RetrievalError as e:
            logger.warning("Could not fetch bank balance: %s", e)
            return None
