"""Mini README: HTTP client for the transactions API.

Structure:
    * ApiError - raised for transport failures and non-2xx responses.
    * TransactionsApiClient - list, create and delete over ``httpx``.

The client takes any ``httpx.Client``; tests hand it FastAPI's
``TestClient`` so the same code path runs against an in-process app.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from urllib.parse import quote

import httpx

from ..errors import NeoFinanceError
from ..logging_utils import get_logger
from .entries import LedgerEntry

LOGGER = get_logger(__name__)


class ApiError(NeoFinanceError):
    """A request to the transactions API did not succeed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Prefer the server's ``error`` field, then the raw body, then ``fallback``."""

    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return response.text.strip() or fallback


class TransactionsApiClient:
    """Thin wrapper translating HTTP exchanges into ``LedgerEntry`` objects."""

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @classmethod
    def connect(cls, base_url: str, *, timeout: float = 10.0) -> "TransactionsApiClient":
        """Create a client with its own connection pool for ``base_url``."""

        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def _request(self, method: str, path: str, fallback: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as error:
            LOGGER.warning("%s %s failed: %s", method, path, error)
            raise ApiError(f"{fallback}: {error}") from error
        if response.is_error:
            raise ApiError(_error_message(response, fallback), status_code=response.status_code)
        return response

    def list_transactions(self) -> List[LedgerEntry]:
        response = self._request("GET", "/transactions", "Failed to load transactions")
        try:
            return [LedgerEntry.from_wire(item) for item in response.json()]
        except (KeyError, TypeError, ValueError) as error:
            raise ApiError(f"Failed to load transactions: unexpected payload ({error})") from error

    def create_transaction(self, payload: Mapping[str, Any]) -> LedgerEntry:
        response = self._request(
            "POST", "/transactions", "Failed to save transaction", json=dict(payload)
        )
        try:
            return LedgerEntry.from_wire(response.json())
        except (KeyError, TypeError, ValueError) as error:
            raise ApiError(f"Failed to save transaction: unexpected payload ({error})") from error

    def delete_transaction(self, identifier: str) -> None:
        self._request(
            "DELETE", f"/transactions/{quote(identifier, safe='')}", "Failed to delete transaction"
        )

    def close(self) -> None:
        self._http.close()
