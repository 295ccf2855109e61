"""Mini README: Client-side copies of server transactions.

Structure:
    * LedgerEntry - cached record as received from the HTTP API.
    * build_payload - assemble a creation body from form-style values.

Entries are derived data: the server stays authoritative and every entry in
a ledger carries the identifier the server assigned.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping

from ..transactions.timestamps import format_timestamp, parse_timestamp


@dataclass(slots=True, frozen=True)
class LedgerEntry:
    """Transaction as held in the client ledger."""

    id: str
    description: str
    amount: float
    kind: str
    occurred_at: datetime

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "LedgerEntry":
        """Map a JSON record, renaming the storage ``_id`` field to ``id``."""

        return cls(
            id=str(payload["_id"]),
            description=str(payload["description"]),
            amount=float(payload["amount"]),
            kind=str(payload["type"]),
            occurred_at=parse_timestamp(payload["dateTime"]),
        )

    @property
    def is_income(self) -> bool:
        return self.kind == "income"

    def display_amount(self) -> str:
        """Format the amount with a direction sign, e.g. ``+$12.50``."""

        sign = "+" if self.is_income else "-"
        return f"{sign}${self.amount:.2f}"


def build_payload(
    description: str, amount: float, kind: str, occurred_at: datetime
) -> Dict[str, Any]:
    """Build a POST body; naive timestamps are read as local wall-clock time."""

    if occurred_at.tzinfo is None:
        occurred_at = occurred_at.astimezone()
    return {
        "description": description,
        "amount": float(amount),
        "type": kind,
        "dateTime": format_timestamp(occurred_at),
    }
