"""Mini README: HTTP interface for NeoFinance.

Exports the FastAPI application factory serving the transactions API and the
dashboard page. ``main_tracker.py`` launches it with uvicorn.
"""

from .web_app import CORS_HEADERS, create_application

__all__ = ["CORS_HEADERS", "create_application"]
