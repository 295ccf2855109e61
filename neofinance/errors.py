"""Mini README: Error taxonomy shared by the storage, service and HTTP layers.

Structure:
    * NeoFinanceError - root of every domain error.
    * InvalidInput - malformed, missing or out-of-range request data.
    * NotFound - the addressed transaction does not exist.
    * StorageError - base for persistence failures, split into
      StorageUnavailable (connectivity or timeout, safe to retry) and
      WriteFailure (the store rejected a write).
    * ConfigurationError - the process cannot be started as configured.

Storage adapters raise the storage classes with the driver exception chained
as ``__cause__``; the HTTP layer maps each class to a status code.
"""

from __future__ import annotations


class NeoFinanceError(Exception):
    """Base class for NeoFinance errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInput(NeoFinanceError, ValueError):
    """Raised when client supplied data fails validation."""


class NotFound(NeoFinanceError, LookupError):
    """Raised when a transaction identifier does not match a stored record."""


class StorageError(NeoFinanceError):
    """Base class for failures reported by a storage adapter."""


class StorageUnavailable(StorageError):
    """The document store could not be reached within the time budget."""


class WriteFailure(StorageError):
    """The document store rejected a write for a reason other than connectivity."""


class ConfigurationError(NeoFinanceError):
    """Raised when settings do not describe a usable deployment."""
