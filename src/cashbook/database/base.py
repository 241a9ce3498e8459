"""Abstract database interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from cashbook.domain.entities import (
    BankBalanceSnapshot,
    ClosingDraft,
    ClosingRecord,
    OpeningBalanceRecord,
    RecorderIdentity,
)


class Collection(str, Enum):
    """Named record collections served by the store."""

    SALES = "sales"
    CREDIT_GRANTS = "credit_grants"
    RECEIVABLE_PAYMENTS = "receivable_payments"
    PAYABLE_PAYMENTS = "payable_payments"
    EXPENSES = "expenses"
    TRANSFERS = "transfers"
    OPENING_BALANCES = "opening_balances"
    CLOSINGS = "closings"


class PredicateOp(str, Enum):
    """Comparison supported in query predicates."""

    EQ = "eq"
    IN = "in"
    GTE = "gte"
    LTE = "lte"
    LT = "lt"


@dataclass(frozen=True)
class Predicate:
    """Filter on a single named field."""

    field: str
    op: PredicateOp
    value: Any

    @classmethod
    def eq(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOp.EQ, value)

    @classmethod
    def is_in(cls, field: str, values: Sequence[Any]) -> "Predicate":
        return cls(field, PredicateOp.IN, tuple(values))

    @classmethod
    def gte(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOp.GTE, value)

    @classmethod
    def lte(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOp.LTE, value)

    @classmethod
    def lt(cls, field: str, value: Any) -> "Predicate":
        return cls(field, PredicateOp.LT, value)


@dataclass(frozen=True)
class Ordering:
    """Single-field ordering."""

    field: str
    descending: bool = False


class Database(ABC):
    """Abstract database interface for cashbook.

    Reads go through :meth:`query`; the only writes are the opening balance
    upsert and the closing insert.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def query(
        self,
        collection: Collection,
        predicates: Sequence[Predicate] = (),
        order_by: Optional[Ordering] = None,
        limit: Optional[int] = None,
    ) -> list[Any]:
        """Query a collection and return domain entities.

        Args:
            collection: Collection to read
            predicates: Filters, all of which must hold
            order_by: Optional single-field ordering
            limit: Optional maximum number of records

        Raises:
            RetrievalError: If the store fails to answer
            ValidationError: If a predicate names an unknown field
        """
        pass

    @abstractmethod
    def get_bank_balance(self) -> Optional[BankBalanceSnapshot]:
        """Get the singleton bank balance snapshot, or None if none exists.

        Raises:
            RetrievalError: If the store fails to answer
        """
        pass

    @abstractmethod
    def upsert_opening_balance(
        self,
        day: date,
        amount: Decimal,
        notes: Optional[str] = None,
        recorded_by: Optional[RecorderIdentity] = None,
    ) -> OpeningBalanceRecord:
        """Insert or overwrite the opening balance for a date.

        Raises:
            PersistenceError: If the write is rejected
        """
        pass

    @abstractmethod
    def create_closing(self, draft: ClosingDraft) -> ClosingRecord:
        """Insert a closing record.

        Raises:
            PersistenceError: If the opening linkage is missing or the write
                is rejected
            ClosingConflictError: If a closing already exists for the date
        """
        pass
