"""Mini README: Tests covering the transaction service against storage adapters.

Structure:
    * creation tests - identifiers assigned by storage, rejected input leaves
      storage untouched.
    * deletion tests - exactly one record removed, unknown and malformed ids.
    * failure tests - storage errors keep their class and chained cause.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from neofinance.errors import InvalidInput, NotFound, StorageError, StorageUnavailable
from neofinance.storage import InMemoryTransactionStore
from neofinance.transactions import TransactionKind, TransactionService


def _create(service: TransactionService, description: str, amount: float, kind: str, when: str):
    return service.create(
        {"description": description, "amount": amount, "type": kind, "dateTime": when}
    )


def test_create_assigns_unique_identifiers_and_lists_records(service: TransactionService) -> None:
    salary = _create(service, "Salary", 1000, "income", "2024-01-01T00:00:00Z")
    rent = _create(service, "Rent", 400, "expense", "2024-01-02T00:00:00Z")

    assert isinstance(salary.identifier, ObjectId)
    assert salary.identifier != rent.identifier
    listed = service.list()
    assert [transaction.identifier for transaction in listed] == [salary.identifier, rent.identifier]
    assert listed[0] == salary
    assert listed[1].kind is TransactionKind.EXPENSE


def test_created_timestamp_round_trips_through_storage(service: TransactionService) -> None:
    created = _create(service, "Coffee", 3.5, "expense", "2024-06-01T08:30:15.250+02:00")

    (listed,) = service.list()

    assert listed.occurred_at == created.occurred_at
    assert listed.occurred_at == datetime(2024, 6, 1, 6, 30, 15, 250000, tzinfo=timezone.utc)
    assert listed.as_dict()["dateTime"] == "2024-06-01T06:30:15.250Z"


def test_invalid_input_persists_nothing(
    service: TransactionService, store: InMemoryTransactionStore
) -> None:
    with pytest.raises(InvalidInput):
        _create(service, "Refund", 0, "income", "2024-01-01T00:00:00Z")

    assert len(store) == 0
    assert service.list() == []


def test_delete_removes_only_the_addressed_record(service: TransactionService) -> None:
    salary = _create(service, "Salary", 1000, "income", "2024-01-01T00:00:00Z")
    rent = _create(service, "Rent", 400, "expense", "2024-01-02T00:00:00Z")

    service.delete(salary.external_id)

    assert [transaction.identifier for transaction in service.list()] == [rent.identifier]


def test_delete_unknown_identifier_raises_not_found(service: TransactionService) -> None:
    kept = _create(service, "Salary", 1000, "income", "2024-01-01T00:00:00Z")

    with pytest.raises(NotFound):
        service.delete(str(ObjectId()))

    assert [transaction.identifier for transaction in service.list()] == [kept.identifier]


def test_delete_is_not_repeatable(service: TransactionService) -> None:
    created = _create(service, "Salary", 1000, "income", "2024-01-01T00:00:00Z")
    service.delete(created.external_id)

    with pytest.raises(NotFound):
        service.delete(created.external_id)


def test_delete_malformed_identifier_raises_invalid_input(service: TransactionService) -> None:
    with pytest.raises(InvalidInput, match="invalid ID format"):
        service.delete("12345")


def test_storage_failures_keep_class_and_cause(unavailable_service: TransactionService) -> None:
    with pytest.raises(StorageUnavailable, match="insert error: connection refused") as raised:
        _create(unavailable_service, "Salary", 1000, "income", "2024-01-01T00:00:00Z")
    assert isinstance(raised.value.__cause__, StorageUnavailable)

    with pytest.raises(StorageUnavailable, match="database error"):
        unavailable_service.list()

    with pytest.raises(StorageUnavailable, match="delete error"):
        unavailable_service.delete(str(ObjectId()))


def test_invalid_input_is_reported_before_storage_is_touched(
    unavailable_service: TransactionService,
) -> None:
    with pytest.raises(InvalidInput):
        _create(unavailable_service, "", 10, "income", "2024-01-01T00:00:00Z")
    with pytest.raises(InvalidInput):
        unavailable_service.delete("bogus")


def test_undecodable_documents_surface_as_storage_errors() -> None:
    store = InMemoryTransactionStore(
        records=[{"description": "Legacy", "amount": 5, "type": "transfer", "dateTime": None}]
    )

    with pytest.raises(StorageError, match="decoding error"):
        TransactionService(store).list()
