"""Mini README: Transaction service orchestrating validation and storage.

Structure:
    * TransactionService - create, list and delete operations over a
      ``TransactionStore`` injected at construction time.

The service owns the translation between storage documents and
``Transaction`` objects and the mapping between ``ObjectId`` values and their
wire form. Storage failures are re-raised with the failing operation named and
the adapter error chained, so nothing about the cause is lost on its way to
the HTTP layer.
"""

from __future__ import annotations

from typing import Any, Callable, List, TypeVar

from ..errors import NotFound, StorageError
from ..logging_utils import get_logger
from ..storage import TransactionStore
from .identifiers import from_external
from .models import Transaction
from .validation import parse_transaction_input

LOGGER = get_logger(__name__)

_Result = TypeVar("_Result")


class TransactionService:
    """Validate, persist and retrieve transactions."""

    def __init__(self, store: TransactionStore) -> None:
        self._store = store
        LOGGER.debug("Transaction service bound to %s store", store.backend_name)

    @property
    def store(self) -> TransactionStore:
        return self._store

    def _call_store(
        self, operation: str, call: Callable[..., _Result], *args: Any
    ) -> _Result:
        """Invoke the adapter, attaching the operation name to storage failures."""

        try:
            return call(*args)
        except StorageError as error:
            LOGGER.error("Storage %s failed: %s", operation, error)
            raise type(error)(f"{operation} error: {error}") from error

    def create(self, payload: object) -> Transaction:
        """Validate ``payload``, persist it and return the stored record."""

        draft = parse_transaction_input(payload)
        identifier = self._call_store("insert", self._store.insert, draft.to_document())
        transaction = Transaction.from_draft(identifier, draft)
        LOGGER.info(
            "Created %s transaction %s for %.2f",
            transaction.kind.value,
            transaction.external_id,
            transaction.amount,
        )
        return transaction

    def list(self) -> List[Transaction]:
        """Return every stored transaction without filtering."""

        documents = self._call_store("database", self._store.list_all)
        try:
            transactions = [Transaction.from_document(document) for document in documents]
        except (KeyError, TypeError, ValueError) as error:
            LOGGER.error("Stored transaction could not be decoded: %s", error)
            raise StorageError(f"decoding error: {error}") from error
        LOGGER.debug("Listing %s transactions", len(transactions))
        return transactions

    def delete(self, identifier_text: str) -> None:
        """Delete the transaction addressed by its wire identifier."""

        identifier = from_external(identifier_text)
        deleted = self._call_store("delete", self._store.delete_by_id, identifier)
        if not deleted:
            raise NotFound("transaction not found")
        LOGGER.info("Deleted transaction %s", identifier_text)
