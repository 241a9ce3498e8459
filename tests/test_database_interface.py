"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from sqlalchemy import event

from cashbook.database.base import Collection, Ordering, Predicate
from cashbook.database.mappers import as_utc, to_storage_datetime
from cashbook.domain import entities
from cashbook.domain.errors import RetrievalError, ValidationError
from cashbook.utils.date_parser import BUSINESS_TIMEZONE


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_query_sales_returns_domain_models(self, temp_db, seed):
        seed.sale("S1", datetime(2024, 3, 15, 15, tzinfo=UTC), "10.00", status="AUTHORIZED")

        sales = temp_db.query(Collection.SALES)

        assert len(sales) == 1
        assert isinstance(sales[0], entities.Sale)
        assert sales[0].status == entities.SaleStatus.AUTHORIZED
        assert isinstance(sales[0].total, Decimal)

    def test_query_accepts_collection_name(self, temp_db, seed):
        seed.expense("E1", datetime(2024, 3, 15, 15, tzinfo=UTC), "3")
        expenses = temp_db.query("expenses")
        assert [e.id for e in expenses] == ["E1"]

    def test_query_with_predicates_ordering_and_limit(self, temp_db, seed):
        for hour, sale_id in ((14, "A"), (15, "B"), (16, "C"), (17, "D")):
            seed.sale(sale_id, datetime(2024, 3, 15, hour, tzinfo=UTC), "1")

        sales = temp_db.query(
            Collection.SALES,
            predicates=(
                Predicate.gte("timestamp", datetime(2024, 3, 15, 15, tzinfo=UTC)),
                Predicate.is_in("status", [entities.SaleStatus.COMPLETED]),
            ),
            order_by=Ordering("timestamp", descending=True),
            limit=2,
        )

        assert [s.id for s in sales] == ["D", "C"]

    def test_aware_predicates_compare_in_utc(self, temp_db, seed):
        seed.sale("S1", datetime(2024, 3, 15, 5, 0, tzinfo=UTC), "1")

        local_midnight = datetime(2024, 3, 15, 0, 0, tzinfo=BUSINESS_TIMEZONE)
        sales = temp_db.query(Collection.SALES, predicates=(Predicate.eq("timestamp", local_midnight),))

        assert [s.id for s in sales] == ["S1"]
        assert sales[0].timestamp == local_midnight

    def test_unknown_field_rejected(self, temp_db):
        with pytest.raises(ValidationError, match="Unknown field"):
            temp_db.query(Collection.SALES, predicates=(Predicate.eq("nope", 1),))

    def test_malformed_row_raises_retrieval_error(self, temp_db, seed):
        seed.sale("S1", datetime(2024, 3, 15, 15, tzinfo=UTC), "1", status="LOST")

        with pytest.raises(RetrievalError):
            temp_db.query(Collection.SALES)

    def test_get_bank_balance(self, temp_db, seed):
        assert temp_db.get_bank_balance() is None
        seed.bank_balance("42.10")

        snapshot = temp_db.get_bank_balance()

        assert isinstance(snapshot, entities.BankBalanceSnapshot)
        assert snapshot.total_amount == Decimal("42.10")
        assert snapshot.updated_at is None

    def test_upsert_opening_balance_returns_domain_model(self, temp_db):
        identity = entities.RecorderIdentity(id="u1", name=None, email="ana@example.com")
        record = temp_db.upsert_opening_balance(
            day=date(2024, 3, 15), amount=Decimal("75"), notes=None, recorded_by=identity
        )

        assert isinstance(record, entities.OpeningBalanceRecord)
        assert record.recorded_by == identity
        assert record.created_at.tzinfo is not None

    def test_receivable_payments_load_grants_in_one_query(self, temp_db, seed):
        for n in range(3):
            seed.credit_grant(
                f"G{n}", datetime(2024, 3, 1, 15, tzinfo=UTC), "50", origin="OTHER", debtor_name=f"Debtor {n}"
            )
            seed.receivable_payment(f"P{n}", datetime(2024, 3, 15, 15, n, tzinfo=UTC), "10", f"G{n}")
        session = temp_db._get_session()
        session.expunge_all()

        statements = []

        def record(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        engine = session.get_bind()
        event.listen(engine, "before_cursor_execute", record)
        try:
            payments = temp_db.query(Collection.RECEIVABLE_PAYMENTS)
        finally:
            event.remove(engine, "before_cursor_execute", record)

        assert sorted(p.debtor_name for p in payments) == ["Debtor 0", "Debtor 1", "Debtor 2"]
        assert len(statements) == 1


def test_storage_datetime_conversion():
    local = datetime(2024, 3, 15, 0, 0, tzinfo=BUSINESS_TIMEZONE)
    stored = to_storage_datetime(local)

    assert stored == datetime(2024, 3, 15, 5, 0)
    assert stored.tzinfo is None
    assert as_utc(stored) == local
    assert as_utc(None) is None
