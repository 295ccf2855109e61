"""Mini README: FastAPI transactions API for NeoFinance.

Structure:
    * create_application - application factory wiring routes, the open CORS
      policy and the error-to-status mapping.
    * dashboard - server-rendered ledger view for quick inspection.

Routes stay free of business rules: they hand request data to the
``TransactionService`` and translate its results and exceptions into HTTP
responses. Error bodies are always ``{"error": "<message>"}``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..client.entries import LedgerEntry
from ..client.ledger import LedgerFilter, compute_totals, filter_entries
from ..configuration import NeoFinanceSettings, get_settings
from ..errors import InvalidInput, NotFound, StorageError
from ..logging_utils import configure_root_logger, get_logger, level_for_environment
from ..storage import build_store
from ..transactions import TransactionService

LOGGER = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _error_response(
    status_code: int, message: str, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def create_application(
    service: Optional[TransactionService] = None,
    settings: Optional[NeoFinanceSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies.

    When ``service`` is omitted the storage adapter is built from settings and
    closed again on shutdown.
    """

    settings = settings or get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    owns_store = service is None
    if service is None:
        service = TransactionService(build_store(settings))
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            await run_in_threadpool(service.store.ping)
        except StorageError as error:
            # Keep serving: /health must report the process as up regardless.
            LOGGER.warning("Storage unreachable at start-up: %s", error)
        else:
            LOGGER.info("Connected to %s storage", service.store.backend_name)
        yield
        if owns_store:
            service.store.close()

    app = FastAPI(title="NeoFinance Transactions", version="1.0.0", lifespan=lifespan)
    app.state.transaction_service = service

    @app.middleware("http")
    async def open_cors(request: Request, call_next: Any) -> Response:
        """Attach the open CORS headers and answer pre-flight requests directly."""

        if request.method == "OPTIONS":
            response: Response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(InvalidInput)
    async def invalid_input(_: Request, error: InvalidInput) -> JSONResponse:
        LOGGER.info("Rejected request: %s", error)
        return _error_response(400, str(error))

    @app.exception_handler(NotFound)
    async def not_found(_: Request, error: NotFound) -> JSONResponse:
        return _error_response(404, str(error))

    @app.exception_handler(StorageError)
    async def storage_error(_: Request, error: StorageError) -> JSONResponse:
        return _error_response(500, str(error))

    @app.exception_handler(RequestValidationError)
    async def malformed_body(_: Request, error: RequestValidationError) -> JSONResponse:
        reasons = "; ".join(str(detail.get("msg", detail)) for detail in error.errors())
        return _error_response(400, f"invalid request body: {reasons}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, error: StarletteHTTPException) -> JSONResponse:
        return _error_response(error.status_code, str(error.detail), headers=error.headers)

    @app.exception_handler(Exception)
    async def unexpected_error(_: Request, error: Exception) -> JSONResponse:
        # Runs outside the CORS middleware, so the headers are added here.
        LOGGER.exception("Unhandled error: %s", error)
        return _error_response(500, f"internal error: {error}", headers=CORS_HEADERS)

    @app.get("/health")
    async def health() -> Dict[str, str]:
        """Report liveness without touching storage."""

        return {"status": "ok", "service": settings.service_name}

    @app.get("/transactions")
    def list_transactions() -> JSONResponse:
        """Return every transaction as a JSON array."""

        transactions = service.list()
        return JSONResponse([transaction.as_dict() for transaction in transactions])

    @app.post("/transactions")
    def create_transaction(payload: Any = Body(None)) -> JSONResponse:
        """Validate and store a transaction, returning the stored record."""

        transaction = service.create(payload)
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.delete("/transactions/{transaction_id:path}")
    def delete_transaction(transaction_id: str) -> Response:
        """Delete a transaction by the identifier in the trailing path segment."""

        service.delete(transaction_id)
        return Response(status_code=204)

    @app.get("/", response_class=HTMLResponse)
    def dashboard(
        request: Request,
        view: LedgerFilter = Query(LedgerFilter.ALL, alias="filter"),
    ) -> HTMLResponse:
        """Render balance figures and the filtered transaction list."""

        try:
            entries = [LedgerEntry.from_wire(item.as_dict()) for item in service.list()]
        except StorageError as error:
            return templates.TemplateResponse(
                request,
                "dashboard.html",
                {"error": str(error), "filters": list(LedgerFilter), "view": view},
                status_code=500,
            )
        entries.sort(key=lambda entry: entry.occurred_at, reverse=True)
        LOGGER.debug("Rendering dashboard with %s entries (%s)", len(entries), view.value)
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "error": None,
                "totals": compute_totals(entries),
                "entries": filter_entries(entries, view),
                "filters": list(LedgerFilter),
                "view": view,
            },
        )

    return app
