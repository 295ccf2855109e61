"""Mini README: Transaction domain and service layer.

Groups the ``Transaction`` types, the identifier and timestamp mappings used
between storage and the wire, payload validation, and the
``TransactionService`` that ties them to a storage adapter.
"""

from .identifiers import from_external, to_external
from .models import Transaction, TransactionDraft, TransactionKind
from .service import TransactionService
from .timestamps import format_timestamp, parse_timestamp
from .validation import parse_transaction_input

__all__ = [
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
    "TransactionService",
    "format_timestamp",
    "from_external",
    "parse_timestamp",
    "parse_transaction_input",
    "to_external",
]
