"""Mini README: Shared fixtures for the NeoFinance test-suite.

Structure:
    * UnavailableStore - adapter whose every call fails as if MongoDB were down.
    * store / service / settings / client fixtures wiring the in-memory store
      into the FastAPI application.
"""

from __future__ import annotations

from typing import Any, List, Mapping

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from neofinance.configuration import NeoFinanceSettings
from neofinance.errors import StorageUnavailable
from neofinance.interface import create_application
from neofinance.storage import InMemoryTransactionStore, TransactionStore
from neofinance.transactions import TransactionService


class UnavailableStore(TransactionStore):
    """Store simulating a cluster that cannot be reached."""

    backend_name = "unavailable"

    def _fail(self) -> None:
        raise StorageUnavailable("connection refused")

    def insert(self, record: Mapping[str, Any]) -> ObjectId:
        self._fail()

    def list_all(self) -> List[dict]:
        self._fail()

    def delete_by_id(self, identifier: ObjectId) -> bool:
        self._fail()

    def ping(self) -> None:
        self._fail()


@pytest.fixture
def settings() -> NeoFinanceSettings:
    return NeoFinanceSettings(storage_backend="memory", service_name="expense-tracker")


@pytest.fixture
def store() -> InMemoryTransactionStore:
    return InMemoryTransactionStore()


@pytest.fixture
def service(store: InMemoryTransactionStore) -> TransactionService:
    return TransactionService(store)


@pytest.fixture
def client(service: TransactionService, settings: NeoFinanceSettings) -> TestClient:
    return TestClient(create_application(service=service, settings=settings))


@pytest.fixture
def unavailable_service() -> TransactionService:
    return TransactionService(UnavailableStore())


@pytest.fixture
def unavailable_client(
    unavailable_service: TransactionService, settings: NeoFinanceSettings
) -> TestClient:
    return TestClient(create_application(service=unavailable_service, settings=settings))
