"""Tests for the per-day record fetchers."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from cashbook.database.base import Database
from cashbook.domain.entities import SaleStatus, TransferDirection
from cashbook.domain.errors import RetrievalError
from cashbook.domain.fetchers import RecordFetcher
from cashbook.domain.time_window import resolve_time_window

DAY = date(2024, 3, 15)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class FailingDatabase(Database):
    """Database whose every read fails."""

    def connect(self):
        pass

    def disconnect(self):
        pass

    def initialize_schema(self):
        pass

    def query(self, collection, predicates=(), order_by=None, limit=None):
        raise RetrievalError(f"{collection.value} unavailable")

    def get_bank_balance(self):
        raise RetrievalError("bank balance unavailable")

    def upsert_opening_balance(self, day, amount, notes=None, recorded_by=None):
        raise NotImplementedError

    def create_closing(self, draft):
        raise NotImplementedError


@pytest.fixture
def window():
    return resolve_time_window(DAY)


@pytest.fixture
def fetcher(temp_db):
    return RecordFetcher(temp_db)


def test_fetch_sales_window_bounds(fetcher, seed, window):
    seed.sale("before", utc(2024, 3, 15, 4, 59, 59, 999000), "10")
    seed.sale("first", utc(2024, 3, 15, 5, 0, 0), "20")
    seed.sale("last", utc(2024, 3, 16, 4, 59, 59, 999000), "30")
    seed.sale("after", utc(2024, 3, 16, 5, 0, 0), "40")

    sales = fetcher.fetch_sales(window)

    assert [s.id for s in sales] == ["last", "first"]


def test_fetch_sales_only_recognized_statuses(fetcher, seed, window):
    seed.sale("done", utc(2024, 3, 15, 15), "10", status="COMPLETED")
    seed.sale("auth", utc(2024, 3, 15, 16), "10", status="AUTHORIZED")
    seed.sale("pending", utc(2024, 3, 15, 17), "10", status="PENDING")
    seed.sale("rejected", utc(2024, 3, 15, 18), "10", status="REJECTED")
    seed.sale("cancelled", utc(2024, 3, 15, 19), "10", status="CANCELLED")

    sales = fetcher.fetch_sales(window)

    assert {s.id for s in sales} == {"done", "auth"}
    assert {s.status for s in sales} == {SaleStatus.COMPLETED, SaleStatus.AUTHORIZED}


def test_fetch_sales_returns_domain_values(fetcher, seed, window):
    seed.sale("S1", utc(2024, 3, 15, 15, 30), "99.95", profit="20.10", customer_name="Ana")

    sale = fetcher.fetch_sales(window)[0]

    assert sale.total == Decimal("99.95")
    assert sale.profit == Decimal("20.10")
    assert sale.timestamp == utc(2024, 3, 15, 15, 30)
    assert sale.timestamp.tzinfo is not None
    assert sale.customer_name == "Ana"


def test_fetch_receivable_payments_carries_debtor_name(fetcher, seed, window):
    seed.credit_grant("G1", utc(2024, 3, 1, 15), "80", origin="OTHER", debtor_name="Luis")
    seed.receivable_payment("P1", utc(2024, 3, 15, 18), "30", "G1", method_tag="EFECTIVO")

    payments = fetcher.fetch_receivable_payments(window)

    assert len(payments) == 1
    assert payments[0].debtor_name == "Luis"
    assert payments[0].amount == Decimal("30")


def test_fetch_expenses_and_payables(fetcher, seed, window):
    seed.expense("E1", utc(2024, 3, 15, 14), "12.50", reason="Bags")
    seed.expense("E0", utc(2024, 3, 14, 14), "99")
    seed.payable_payment("PP1", utc(2024, 3, 15, 20), "70", supplier_name="Acme")

    expenses = fetcher.fetch_expenses(window)
    payables = fetcher.fetch_payable_payments(window)

    assert [e.id for e in expenses] == ["E1"]
    assert [p.supplier_name for p in payables] == ["Acme"]


def test_fetch_transfers_splits_by_direction(fetcher, seed, window):
    seed.transfer("T1", utc(2024, 3, 15, 14), "100", direction="INFLOW")
    seed.transfer("T2", utc(2024, 3, 15, 15), "50", direction="INFLOW")
    seed.transfer("T3", utc(2024, 3, 15, 16), "30", direction="OUTFLOW")

    transfers = fetcher.fetch_transfers(window)

    assert transfers.inflow_total == Decimal("150")
    assert transfers.outflow_total == Decimal("30")
    assert transfers.net == Decimal("120")
    assert len(transfers.transfers) == 3
    assert all(t.direction == TransferDirection.INFLOW for t in transfers.inflows)
    assert [t.id for t in transfers.outflows] == ["T3"]


def test_fetch_bank_balance(fetcher, seed):
    assert fetcher.fetch_bank_balance() is None

    seed.bank_balance("1500.25", updated_at=utc(2024, 3, 15, 12))
    snapshot = fetcher.fetch_bank_balance()

    assert snapshot.total_amount == Decimal("1500.25")
    assert snapshot.updated_at == utc(2024, 3, 15, 12)


def test_failing_store_degrades_to_empty(window, caplog):
    fetcher = RecordFetcher(FailingDatabase())

    assert fetcher.fetch_sales(window) == []
    assert fetcher.fetch_credit_grants(window) == []
    assert fetcher.fetch_receivable_payments(window) == []
    assert fetcher.fetch_payable_payments(window) == []
    assert fetcher.fetch_expenses(window) == []
    transfers = fetcher.fetch_transfers(window)
    assert transfers.transfers == ()
    assert transfers.net == Decimal("0")
    assert fetcher.fetch_bank_balance() is None

    assert "Could not fetch sales" in caplog.text
