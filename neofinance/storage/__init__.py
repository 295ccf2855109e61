"""Mini README: Persistence adapters for NeoFinance transactions.

The package is divided into ``base`` for the abstract adapter contract,
``mongo`` for the MongoDB-backed implementation used in deployments, and
``memory`` for the process-local store used by tests and demo runs.
``build_store`` picks an implementation from the runtime settings.
"""

from .base import TransactionStore, build_store
from .memory import InMemoryTransactionStore
from .mongo import MongoTransactionStore

__all__ = [
    "InMemoryTransactionStore",
    "MongoTransactionStore",
    "TransactionStore",
    "build_store",
]
