"""Mini README: Validation of incoming transaction payloads.

Structure:
    * parse_transaction_input - turn a decoded JSON body into a
      ``TransactionDraft`` or raise ``InvalidInput``.

Field aliases: ``type`` or ``kind`` for the direction, ``dateTime`` or
``occurredAt`` for the timestamp. Identifier fields in the payload are
ignored because identifiers are only ever assigned by storage.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping

from ..errors import InvalidInput
from .models import TransactionDraft, TransactionKind
from .timestamps import parse_timestamp

_FIELD_ALIASES = {
    "description": ("description",),
    "amount": ("amount",),
    "type": ("type", "kind"),
    "dateTime": ("dateTime", "occurredAt"),
}


def _lookup(payload: Mapping[str, Any], names: tuple) -> Any:
    for name in names:
        if payload.get(name) is not None:
            return payload[name]
    return None


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_description(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidInput("description must be a string")
    return value.strip()


def _parse_amount(value: Any) -> float:
    """Accept JSON numbers and numeric strings that are positive and finite."""

    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidInput("amount must be a number")
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except OverflowError as error:
        raise InvalidInput("amount must be a finite number") from error
    except ValueError as error:
        raise InvalidInput(f"amount must be a number, got {value!r}") from error

    if not math.isfinite(amount):
        raise InvalidInput("amount must be a finite number")
    if amount <= 0:
        raise InvalidInput("amount must be greater than zero")
    return amount


def parse_transaction_input(payload: object) -> TransactionDraft:
    """Validate a creation payload and return a normalised draft."""

    if not isinstance(payload, Mapping):
        raise InvalidInput("invalid request body: expected a JSON object")

    values = {field: _lookup(payload, names) for field, names in _FIELD_ALIASES.items()}
    missing: List[str] = [field for field, value in values.items() if _is_missing(value)]
    if missing:
        raise InvalidInput(f"missing required fields: {', '.join(missing)}")

    return TransactionDraft(
        description=_parse_description(values["description"]),
        amount=_parse_amount(values["amount"]),
        kind=TransactionKind.from_str(values["type"]),
        occurred_at=parse_timestamp(values["dateTime"]),
    )
