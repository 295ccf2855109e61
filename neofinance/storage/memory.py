"""Mini README: Process-local transaction store.

Keeps documents in an insertion-ordered dictionary keyed by ``ObjectId`` so
identifiers look exactly like the ones MongoDB assigns. Used by the test
suite and by ``storage_backend=memory`` demo runs.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bson import ObjectId

from ..logging_utils import get_logger
from .base import Document, TransactionStore

LOGGER = get_logger(__name__)


class InMemoryTransactionStore(TransactionStore):
    """Dictionary-backed store safe for concurrent request threads."""

    backend_name = "memory"

    def __init__(self, records: Optional[Iterable[Mapping[str, Any]]] = None) -> None:
        self._documents: Dict[ObjectId, Document] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.insert(record)
        LOGGER.debug("In-memory store initialised with %s documents", len(self._documents))

    def insert(self, record: Mapping[str, Any]) -> ObjectId:
        identifier = ObjectId()
        document = {key: value for key, value in record.items() if key != "_id"}
        document["_id"] = identifier
        with self._lock:
            self._documents[identifier] = document
        return identifier

    def list_all(self) -> List[Document]:
        with self._lock:
            return [dict(document) for document in self._documents.values()]

    def delete_by_id(self, identifier: ObjectId) -> bool:
        with self._lock:
            return self._documents.pop(identifier, None) is not None

    def __len__(self) -> int:
        return len(self._documents)
