"""Mini README: Core package initializer for the NeoFinance tracker.

This module exposes convenience imports that allow other parts of the
application to access shared helpers without needing to know the exact
module structure. Subpackages are split into ``storage`` (persistence
adapters), ``transactions`` (validation and the service layer),
``interface`` (HTTP routes) and ``client`` (the ledger state consumed by
user interfaces).
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
