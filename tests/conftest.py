"""Shared pytest fixtures for cashbook tests."""

import tempfile
import os
from datetime import datetime, timezone
from decimal import Decimal
import pytest

from cashbook.database import models
from cashbook.database.factories import create_sqlite_database
from cashbook.domain.balances import BalanceService
from cashbook.domain.summary import DailySummaryService


def naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class StoreSeeder:
    """Writes source-of-truth rows straight through the ORM.

    Sales, credits, payments, expenses, transfers and the bank balance are
    owned by other systems, so the Database interface has no writers for them.
    """

    def __init__(self, db):
        self.db = db

    def _add(self, row):
        session = self.db._get_session()
        session.add(row)
        session.commit()
        return row

    def sale(self, id, timestamp, total, profit="0", status="COMPLETED", **kwargs):
        return self._add(
            models.Sale(
                id=id,
                timestamp=naive_utc(timestamp),
                total=Decimal(str(total)),
                profit=Decimal(str(profit)),
                status=status,
                **kwargs,
            )
        )

    def credit_grant(
        self,
        id,
        granted_at,
        amount,
        origin="SALE",
        sale_id=None,
        debtor_id="D1",
        status="ACTIVE",
        **kwargs,
    ):
        return self._add(
            models.CreditGrant(
                id=id,
                debtor_id=debtor_id,
                origin=origin,
                amount=Decimal(str(amount)),
                outstanding_balance=Decimal(str(amount)),
                status=status,
                granted_at=naive_utc(granted_at),
                sale_id=sale_id,
                **kwargs,
            )
        )

    def receivable_payment(self, id, paid_at, amount, credit_grant_id, method_tag="CASH", **kwargs):
        return self._add(
            models.ReceivablePayment(
                id=id,
                amount=Decimal(str(amount)),
                method_tag=method_tag,
                paid_at=naive_utc(paid_at),
                credit_grant_id=credit_grant_id,
                **kwargs,
            )
        )

    def payable_payment(self, id, paid_at, amount, method_tag="CASH", **kwargs):
        return self._add(
            models.PayablePayment(
                id=id,
                amount=Decimal(str(amount)),
                method_tag=method_tag,
                paid_at=naive_utc(paid_at),
                **kwargs,
            )
        )

    def expense(self, id, spent_at, amount, reason="Supplies", **kwargs):
        return self._add(
            models.Expense(
                id=id,
                amount=Decimal(str(amount)),
                reason=reason,
                spent_at=naive_utc(spent_at),
                **kwargs,
            )
        )

    def transfer(self, id, timestamp, amount, direction="INFLOW", **kwargs):
        return self._add(
            models.Transfer(
                id=id,
                amount=Decimal(str(amount)),
                timestamp=naive_utc(timestamp),
                direction=direction,
                **kwargs,
            )
        )

    def bank_balance(self, total_amount, updated_at=None):
        return self._add(
            models.BankBalance(
                id=1,
                total_amount=Decimal(str(total_amount)),
                updated_at=naive_utc(updated_at) if updated_at is not None else None,
            )
        )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def seed(temp_db):
    """Seeder writing source records into the temporary database."""
    return StoreSeeder(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a DailySummaryService with a temporary database."""
    return DailySummaryService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
