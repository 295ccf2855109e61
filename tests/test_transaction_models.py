"""Mini README: Tests for timestamps, identifier mapping and payload validation.

Structure:
    * timestamp tests - canonical UTC millisecond form and naive rejection.
    * identifier tests - ObjectId <-> hex mapping and malformed text.
    * validation tests - every rejected field and the accepted aliases.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from neofinance.errors import InvalidInput
from neofinance.transactions import (
    Transaction,
    TransactionKind,
    format_timestamp,
    from_external,
    parse_timestamp,
    parse_transaction_input,
    to_external,
)


def _payload(**overrides: object) -> dict:
    payload = {
        "description": "Salary",
        "amount": 1000,
        "type": "income",
        "dateTime": "2024-01-01T00:00:00Z",
    }
    payload.update(overrides)
    return payload


def test_timestamps_normalise_offsets_to_utc() -> None:
    """Offsets are folded into UTC and rendered with a Z suffix."""

    moment = parse_timestamp("2024-01-01T02:00:00+02:00")

    assert moment == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert format_timestamp(moment) == "2024-01-01T00:00:00.000Z"


def test_timestamps_truncate_to_milliseconds() -> None:
    moment = parse_timestamp("2024-03-05T10:11:12.123456Z")

    assert moment.microsecond == 123000
    assert format_timestamp(moment) == "2024-03-05T10:11:12.123Z"
    assert parse_timestamp(format_timestamp(moment)) == moment


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-01T00:00:00",
        "2024-01-01",
        "yesterday",
        "",
        1704067200,
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:59:59-01:00",
    ],
)
def test_timestamps_reject_naive_or_unparseable_values(value: object) -> None:
    """Naive, garbled and out-of-range timestamps are all invalid input."""

    with pytest.raises(InvalidInput):
        parse_timestamp(value)


def test_identifier_mapping_is_lossless() -> None:
    identifier = ObjectId()

    external = to_external(identifier)

    assert len(external) == 24
    assert from_external(external) == identifier


@pytest.mark.parametrize(
    "text, reason",
    [
        ("", "missing transaction ID"),
        ("not-an-id", "invalid ID format"),
        ("65A1B2C3D4E5F6A7B8C9D0E1", "invalid ID format"),
        ("65a1b2c3d4e5f6a7b8c9d0e1/extra", "invalid ID format"),
    ],
)
def test_identifier_mapping_rejects_malformed_text(text: str, reason: str) -> None:
    with pytest.raises(InvalidInput, match=reason):
        from_external(text)


def test_validation_normalises_accepted_payload() -> None:
    draft = parse_transaction_input(_payload(description="  Salary  ", amount="1000.50"))

    assert draft.description == "Salary"
    assert draft.amount == pytest.approx(1000.5)
    assert draft.kind is TransactionKind.INCOME
    assert draft.occurred_at.tzinfo is not None


def test_validation_accepts_kind_and_occurred_at_aliases() -> None:
    draft = parse_transaction_input(
        {
            "description": "Rent",
            "amount": 400,
            "kind": "expense",
            "occurredAt": "2024-01-02T00:00:00Z",
        }
    )

    assert draft.kind is TransactionKind.EXPENSE
    assert draft.occurred_at == datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_validation_ignores_client_supplied_identifier() -> None:
    draft = parse_transaction_input(_payload(_id="65a1b2c3d4e5f6a7b8c9d0e1"))

    assert "_id" not in draft.to_document()


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"amount": 0}, "greater than zero"),
        ({"amount": -5}, "greater than zero"),
        ({"amount": "abc"}, "must be a number"),
        ({"amount": "nan"}, "finite"),
        ({"amount": True}, "must be a number"),
        ({"amount": 10**400}, "finite"),
        ({"amount": "1e400"}, "finite"),
        ({"description": "   "}, "missing required fields: description"),
        ({"description": None, "type": None}, "description, type"),
        ({"type": "Income"}, "type must be one of"),
        ({"type": "transfer"}, "type must be one of"),
        ({"dateTime": "2024-13-01T00:00:00Z"}, "invalid date format"),
    ],
)
def test_validation_rejects_bad_fields(overrides: dict, reason: str) -> None:
    with pytest.raises(InvalidInput, match=reason):
        parse_transaction_input(_payload(**overrides))


def test_validation_rejects_non_object_bodies() -> None:
    with pytest.raises(InvalidInput, match="expected a JSON object"):
        parse_transaction_input([_payload()])


def test_transaction_wire_form_uses_browser_field_names() -> None:
    identifier = ObjectId()
    transaction = Transaction.from_document(
        {
            "_id": identifier,
            "description": "Rent",
            "amount": 400,
            "type": "expense",
            "dateTime": datetime(2024, 1, 2, 1, tzinfo=timezone(timedelta(hours=1))),
        }
    )

    assert transaction.signed_amount == pytest.approx(-400.0)
    assert transaction.as_dict() == {
        "_id": str(identifier),
        "description": "Rent",
        "amount": 400.0,
        "type": "expense",
        "dateTime": "2024-01-02T00:00:00.000Z",
    }
