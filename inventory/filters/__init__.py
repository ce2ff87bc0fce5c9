# inventory/filters/__init__.py
from .transaction import (
    Predicate,
    TransactionFilter,
    build_transaction_predicate,
    by_free_text,
    by_month_and_year,
)

__all__ = [
    "Predicate",
    "TransactionFilter",
    "build_transaction_predicate",
    "by_free_text",
    "by_month_and_year",
]
