"""
Debt Ledger FastAPI application.

This is the entry point for the application. The DebtStore is
opened when the app starts and closed when it stops; all routers
reach it through the get_store dependency.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from debt_ledger.config import get_settings
from debt_ledger.errors import StorageError
from debt_ledger.logging_config import setup_logging
from debt_ledger.store import DebtStore
from debt_ledger.api.health import router as health_router
from debt_ledger.api.debts import router as debts_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    store = DebtStore(settings.DATABASE_URL).open()
    app.state.store = store
    try:
        yield
    finally:
        store.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="A small service for recording who owes what",
    lifespan=lifespan,
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # Fatal to this request only; the store stays usable.
    logger.error(
        "Storage failure on %s %s: %s",
        request.method, request.url.path, exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Storage failure"})


# Register routers
app.include_router(health_router)
app.include_router(debts_router)


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        "debt_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
