"""Mini README: MongoDB storage adapter.

Structure:
    * MongoTransactionStore - wraps a ``pymongo`` collection and classifies
      driver errors into ``StorageUnavailable`` / ``WriteFailure``.

Every call runs inside a ``pymongo.timeout`` block so a slow or unreachable
cluster surfaces as ``StorageUnavailable`` instead of blocking a request
thread. The ``MongoClient`` is thread-safe and shared by all requests.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

import pymongo
from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ExecutionTimeout, PyMongoError
from pymongo.server_api import ServerApi

from ..configuration import NeoFinanceSettings
from ..errors import ConfigurationError, StorageUnavailable, WriteFailure
from ..logging_utils import get_logger
from .base import Document, TransactionStore

LOGGER = get_logger(__name__)

_UNAVAILABLE_ERRORS = (ConnectionFailure, ExecutionTimeout)


class MongoTransactionStore(TransactionStore):
    """Transaction store backed by a single MongoDB collection."""

    backend_name = "mongo"

    def __init__(
        self,
        collection: Collection,
        *,
        read_timeout_seconds: float = 10.0,
        write_timeout_seconds: float = 5.0,
        client: Optional[MongoClient] = None,
    ) -> None:
        self._collection = collection
        self._read_timeout = read_timeout_seconds
        self._write_timeout = write_timeout_seconds
        self._client = client

    @classmethod
    def from_settings(cls, settings: NeoFinanceSettings) -> "MongoTransactionStore":
        """Create a client from settings; the connection itself is established lazily."""

        if not settings.mongodb_uri:
            raise ConfigurationError("MONGODB_URI environment variable not set")

        options: dict = {
            "server_api": ServerApi("1"),
            "tz_aware": True,
            "serverSelectionTimeoutMS": int(settings.read_timeout_seconds * 1000),
        }
        if settings.tls_allow_invalid_certificates:
            LOGGER.warning("MongoDB certificate verification is disabled")
            options["tlsAllowInvalidCertificates"] = True

        client: MongoClient = MongoClient(settings.mongodb_uri, **options)
        collection = client[settings.database_name][settings.collection_name]
        LOGGER.info(
            "Configured MongoDB store %s.%s",
            settings.database_name,
            settings.collection_name,
        )
        return cls(
            collection,
            read_timeout_seconds=settings.read_timeout_seconds,
            write_timeout_seconds=settings.write_timeout_seconds,
            client=client,
        )

    @contextmanager
    def _bounded(self, seconds: float, *, writing: bool) -> Iterator[None]:
        """Run a driver call within a time budget and classify its failures."""

        try:
            with pymongo.timeout(seconds):
                yield
        except _UNAVAILABLE_ERRORS as error:
            raise StorageUnavailable(str(error)) from error
        except PyMongoError as error:
            if error.timeout or not writing:
                raise StorageUnavailable(str(error)) from error
            raise WriteFailure(str(error)) from error

    def insert(self, record: Mapping[str, Any]) -> ObjectId:
        document = {key: value for key, value in record.items() if key != "_id"}
        with self._bounded(self._write_timeout, writing=True):
            result = self._collection.insert_one(document)
        return result.inserted_id

    def list_all(self) -> List[Document]:
        with self._bounded(self._read_timeout, writing=False):
            return list(self._collection.find({}))

    def delete_by_id(self, identifier: ObjectId) -> bool:
        with self._bounded(self._write_timeout, writing=True):
            result = self._collection.delete_one({"_id": identifier})
        return result.deleted_count > 0

    def ping(self) -> None:
        with self._bounded(self._read_timeout, writing=False):
            self._collection.database.command("ping")

    def close(self) -> None:
        super().close()
        if self._client is not None:
            self._client.close()
