"""Mini README: Client ledger state mirroring the server's transactions.

Structure:
    * LedgerStatus - loading / ready / error phases of the initial fetch.
    * LedgerFilter - all / income / expense view selector.
    * LedgerTotals, compute_totals, filter_entries - derived figures.
    * LedgerOperation - one create or delete moving from ``pending`` to
      ``confirmed`` or ``failed``.
    * LedgerState - the cached ledger plus the operations that mutate it.

The list only ever changes when the server has confirmed a change: a created
entry is prepended once the server returns it with its identifier, and an
entry is removed once the server acknowledges the delete. Operations can be
started and resolved independently, so overlapping calls each apply their
effect when they finish without waiting on one another. Aggregates are
computed over the full list and are unaffected by the view filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .api_client import ApiError, TransactionsApiClient
from .entries import LedgerEntry

LOGGER = get_logger(__name__)


class LedgerStatus(str, Enum):
    """Phases of the ledger's initial load."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class LedgerFilter(str, Enum):
    """Selector narrowing the displayed entries."""

    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    def matches(self, entry: LedgerEntry) -> bool:
        return self is LedgerFilter.ALL or entry.kind == self.value


class OperationState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class LedgerTotals:
    """Income, expense and the running balance derived from them."""

    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.expense


def compute_totals(entries: Iterable[LedgerEntry]) -> LedgerTotals:
    """Sum amounts per kind over ``entries``."""

    income = 0.0
    expense = 0.0
    for entry in entries:
        if entry.kind == "income":
            income += entry.amount
        elif entry.kind == "expense":
            expense += entry.amount
    return LedgerTotals(income=income, expense=expense)


def filter_entries(entries: Iterable[LedgerEntry], view: LedgerFilter) -> List[LedgerEntry]:
    """Return the entries visible under ``view`` preserving order."""

    return [entry for entry in entries if view.matches(entry)]


@dataclass(slots=True)
class LedgerOperation:
    """A create or delete request awaiting the server's answer."""

    action: str
    target_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    state: OperationState = OperationState.PENDING
    result: Optional[LedgerEntry] = None
    error: Optional[str] = None

    def _resolve(self, state: OperationState) -> None:
        if self.state is not OperationState.PENDING:
            raise RuntimeError(f"{self.action} operation already {self.state.value}")
        self.state = state


class LedgerState:
    """In-memory ledger kept consistent with the transactions API."""

    def __init__(self, api: TransactionsApiClient) -> None:
        self._api = api
        self._entries: List[LedgerEntry] = []
        self._pending: List[LedgerOperation] = []
        self.status = LedgerStatus.LOADING
        self.error: Optional[str] = None
        self.last_error: Optional[str] = None

    @property
    def transactions(self) -> List[LedgerEntry]:
        """Entries in display order; empty unless the ledger loaded successfully."""

        if self.status is not LedgerStatus.READY:
            return []
        return list(self._entries)

    @property
    def pending(self) -> List[LedgerOperation]:
        return list(self._pending)

    @property
    def totals(self) -> LedgerTotals:
        return compute_totals(self.transactions)

    @property
    def total_income(self) -> float:
        return self.totals.income

    @property
    def total_expense(self) -> float:
        return self.totals.expense

    @property
    def balance(self) -> float:
        return self.totals.balance

    def visible(self, view: LedgerFilter | str = LedgerFilter.ALL) -> List[LedgerEntry]:
        """Entries shown under ``view``; never alters the ledger."""

        return filter_entries(self.transactions, LedgerFilter(view))

    def load(self) -> LedgerStatus:
        """Fetch the full list, replacing whatever the ledger held.

        Failures leave the ledger in the ``error`` status with no entries.
        """

        self.status = LedgerStatus.LOADING
        try:
            entries = self._api.list_transactions()
        except ApiError as error:
            LOGGER.error("Ledger load failed: %s", error)
            self._entries = []
            self.error = str(error)
            self.status = LedgerStatus.ERROR
            return self.status
        self._entries = entries
        self.error = None
        self.status = LedgerStatus.READY
        LOGGER.debug("Ledger loaded with %s entries", len(entries))
        return self.status

    def begin_create(self, payload: Dict[str, Any]) -> LedgerOperation:
        operation = LedgerOperation(action="create", payload=dict(payload))
        self._pending.append(operation)
        return operation

    def begin_delete(self, identifier: str) -> LedgerOperation:
        operation = LedgerOperation(action="delete", target_id=identifier)
        self._pending.append(operation)
        return operation

    def confirm(self, operation: LedgerOperation, entry: Optional[LedgerEntry] = None) -> None:
        """Apply a server-confirmed operation to the list in a single step.

        A create confirmed before the ledger is ``ready`` is not added: the
        list is not shown until a load succeeds, and that load already
        includes the new record.
        """

        if operation.action == "create" and entry is None:
            raise ValueError("confirming a create requires the server's record")
        operation._resolve(OperationState.CONFIRMED)
        self._pending.remove(operation)
        if operation.action == "create":
            operation.result = entry
            if self.status is not LedgerStatus.READY:
                return
            remaining = [existing for existing in self._entries if existing.id != entry.id]
            self._entries = [entry, *remaining]
        else:
            self._entries = [
                existing for existing in self._entries if existing.id != operation.target_id
            ]

    def fail(self, operation: LedgerOperation, error: Exception | str) -> None:
        """Record a failed operation; the list is left untouched."""

        operation._resolve(OperationState.FAILED)
        self._pending.remove(operation)
        operation.error = str(error)
        self.last_error = operation.error
        LOGGER.warning("Ledger %s failed: %s", operation.action, operation.error)

    def create(self, payload: Dict[str, Any]) -> LedgerEntry:
        """Create a transaction and prepend the server's record on success."""

        operation = self.begin_create(payload)
        try:
            entry = self._api.create_transaction(payload)
        except ApiError as error:
            self.fail(operation, error)
            raise
        self.confirm(operation, entry)
        return entry

    def delete(self, identifier: str) -> None:
        """Delete a transaction, removing it locally only once the server agrees."""

        operation = self.begin_delete(identifier)
        try:
            self._api.delete_transaction(identifier)
        except ApiError as error:
            self.fail(operation, error)
            raise
        self.confirm(operation)
