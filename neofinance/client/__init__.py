"""Mini README: Client-side ledger for NeoFinance user interfaces.

Exports the HTTP client for the transactions API and the ``LedgerState``
that caches the server's records, derives income / expense / balance figures
and applies creates and deletes only after the server confirms them.
"""

from .api_client import ApiError, TransactionsApiClient
from .entries import LedgerEntry, build_payload
from .ledger import (
    LedgerFilter,
    LedgerOperation,
    LedgerState,
    LedgerStatus,
    LedgerTotals,
    OperationState,
    compute_totals,
    filter_entries,
)

__all__ = [
    "ApiError",
    "LedgerEntry",
    "LedgerFilter",
    "LedgerOperation",
    "LedgerState",
    "LedgerStatus",
    "LedgerTotals",
    "OperationState",
    "TransactionsApiClient",
    "build_payload",
    "compute_totals",
    "filter_entries",
]
