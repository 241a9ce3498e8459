"""Database layer for cashbook application."""

from cashbook.database.base import Collection, Database, Ordering, Predicate, PredicateOp
from cashbook.database.factories import create_sqlite_database

__all__ = [
    "Collection",
    "Database",
    "Ordering",
    "Predicate",
    "PredicateOp",
    "create_sqlite_database",
]
