"""Mini README: Abstract storage contract for transaction documents.

Structure:
    * TransactionStore - abstract interface implemented by storage adapters.
    * build_store - factory selecting an adapter from ``NeoFinanceSettings``.

Adapters work on plain storage documents (dictionaries keyed ``_id``,
``description``, ``amount``, ``type`` and ``dateTime``) and native
``bson.ObjectId`` identifiers. Translating to the wire representation is the
service layer's job. Failures are reported as ``StorageUnavailable`` or
``WriteFailure`` with the driver error chained.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from bson import ObjectId

from ..configuration import NeoFinanceSettings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Document = Dict[str, Any]


class TransactionStore(ABC):
    """Base interface for transaction persistence backends."""

    backend_name: str = "generic"

    @abstractmethod
    def insert(self, record: Mapping[str, Any]) -> ObjectId:
        """Persist a new document and return its assigned identifier."""

    @abstractmethod
    def list_all(self) -> List[Document]:
        """Return every stored document, unfiltered."""

    @abstractmethod
    def delete_by_id(self, identifier: ObjectId) -> bool:
        """Remove the document if present and report whether one was deleted."""

    def ping(self) -> None:
        """Probe the backend, raising ``StorageUnavailable`` when unreachable."""

    def close(self) -> None:
        """Release connections held by the adapter."""

        LOGGER.debug("Closing %s transaction store", self.backend_name)


def build_store(settings: NeoFinanceSettings) -> TransactionStore:
    """Instantiate the storage adapter named by ``settings.storage_backend``."""

    # Imported lazily so the adapters can import this module for the base class.
    from .memory import InMemoryTransactionStore
    from .mongo import MongoTransactionStore

    if settings.storage_backend == "memory":
        LOGGER.warning("Using in-memory storage; transactions are lost on restart")
        return InMemoryTransactionStore()
    return MongoTransactionStore.from_settings(settings)
