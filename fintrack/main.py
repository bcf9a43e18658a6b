# fintrack/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.sessions import SessionMiddleware

from fintrack.config import get_settings
from fintrack.db import create_db_and_tables
from fintrack.errors import FinanceError
from fintrack.observability import RequestLogMiddleware, configure_logging
from fintrack.responses import fail
from fintrack.routers.auth import router as auth_router
from fintrack.routers.budgets import router as budgets_router
from fintrack.routers.categories import router as categories_router
from fintrack.routers.dashboard import router as dashboard_router
from fintrack.routers.profile import router as profile_router
from fintrack.routers.reports import router as reports_router
from fintrack.routers.system import router as system_router
from fintrack.routers.transactions import router as transactions_router

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("fintrack.errors")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Finance Tracker", version="0.1.0", lifespan=lifespan)

# Middleware order: logging innermost, session outermost so the log line sees user_id
app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
    same_site="lax",
)


# ---- error envelope ---------------------------------------------------------


@app.exception_handler(FinanceError)
async def finance_error_handler(request: Request, exc: FinanceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return fail(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """400 with the first failing field, e.g. "amount: Input should be greater than or equal to 0.01"."""
    first = exc.errors()[0]
    field = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")
    )
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return fail(message, 400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return fail("Internal server error", 500)


# Routers
app.include_router(system_router)
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(budgets_router)
app.include_router(dashboard_router)
app.include_router(reports_router)
