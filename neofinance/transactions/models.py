"""Mini README: Transaction domain types.

Structure:
    * TransactionKind - enum representing income versus expense entries.
    * TransactionDraft - validated input awaiting an identifier from storage.
    * Transaction - persisted record with wire and storage converters.

Amounts are always positive; whether money came in or went out is carried by
``kind``. Wire dictionaries use the field names the browser UI consumes
(``_id``, ``type``, ``dateTime``) while storage documents keep the native
``ObjectId`` and ``datetime`` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping

from bson import ObjectId

from ..errors import InvalidInput
from .identifiers import to_external
from .timestamps import format_timestamp, normalise


class TransactionKind(str, Enum):
    """Enumerate the supported transaction categories."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionKind":
        """Match the exact lowercase value, raising ``InvalidInput`` otherwise."""

        try:
            return cls(value)
        except ValueError as error:
            raise InvalidInput(
                f"type must be one of 'income' or 'expense', got {value!r}"
            ) from error


@dataclass(slots=True, frozen=True)
class TransactionDraft:
    """Validated transaction data that has not been persisted yet."""

    description: str
    amount: float
    kind: TransactionKind
    occurred_at: datetime

    def to_document(self) -> Dict[str, Any]:
        """Export the draft as a storage document without an identifier."""

        return {
            "description": self.description,
            "amount": self.amount,
            "type": self.kind.value,
            "dateTime": self.occurred_at,
        }


@dataclass(slots=True, frozen=True)
class Transaction:
    """Represent a persisted ledger entry."""

    identifier: ObjectId
    description: str
    amount: float
    kind: TransactionKind
    occurred_at: datetime

    @classmethod
    def from_draft(cls, identifier: ObjectId, draft: TransactionDraft) -> "Transaction":
        """Attach the storage-assigned identifier to a validated draft."""

        return cls(
            identifier=identifier,
            description=draft.description,
            amount=draft.amount,
            kind=draft.kind,
            occurred_at=draft.occurred_at,
        )

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Transaction":
        """Rebuild a transaction from a stored document.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when the document
        does not have the expected shape.
        """

        occurred_at = document["dateTime"]
        if not isinstance(occurred_at, datetime):
            raise TypeError(f"dateTime of {document['_id']} is not a date")
        return cls(
            identifier=document["_id"],
            description=str(document["description"]),
            amount=float(document["amount"]),
            kind=TransactionKind(document["type"]),
            occurred_at=normalise(occurred_at),
        )

    @property
    def external_id(self) -> str:
        return to_external(self.identifier)

    @property
    def signed_amount(self) -> float:
        """Amount with the sign implied by ``kind``."""

        return self.amount if self.kind is TransactionKind.INCOME else -self.amount

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with JSON-serialisable values."""

        return {
            "_id": self.external_id,
            "description": self.description,
            "amount": self.amount,
            "type": self.kind.value,
            "dateTime": format_timestamp(self.occurred_at),
        }
