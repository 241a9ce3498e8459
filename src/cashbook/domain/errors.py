"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidDateError(ValidationError):
    """The date given to a daily operation is not a valid calendar date."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class RetrievalError(DomainError):
    """A read against the data store failed."""


class PersistenceError(DomainError):
    """A write against the data store was rejected."""


class ClosingConflictError(PersistenceError):
    """A closing record already exists for the date."""


class AuthenticationError(DomainError):
    """An operation needs an identity but no user is loaded."""


def invalid_date(value: object) -> str:
    """Return message for a value that is not a calendar date."""
    return f"Invalid date for daily summary: {value!r}"


def opening_not_found(day: date) -> str:
    """Return message for a missing opening balance."""
    return f"No opening balance recorded for {day.isoformat()}"


def opening_link_missing(opening_balance_id: int | None) -> str:
    """Return message for a closing whose opening linkage is absent."""
    if opening_balance_id is None:
        return "Closing record requires an opening balance"
    return f"Opening balance {opening_balance_id} not found"


def closing_already_exists(day: date) -> str:
    """Return message for a duplicate closing."""
    return f"A closing record already exists for {day.isoformat()}"
