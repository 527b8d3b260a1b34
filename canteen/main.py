"""FastAPI entrypoint for the canteen registry."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from canteen.api.api import api_router
from canteen.core.config import resolve_session_secret, settings
from canteen.core.exceptions import CanteenError
from canteen.db.base import Base
from canteen.db.session import SessionLocal, engine
from canteen.repositories.sql import SqlStore
from canteen.services.account_service import ensure_default_admin
from canteen.services.session_service import purge_expired_sessions

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

SESSION_SECRET = resolve_session_secret(settings)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    source = "env" if settings.session_secret else "fallback"
    logger.info("Session secret source: %s", source)
    if not settings.session_secret:
        logger.warning("SESSION_SECRET not set; using development fallback secret.")
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        store = SqlStore(session)
        try:
            admin_present = ensure_default_admin(store, settings)
            logger.info("[BOOTSTRAP] default admin present: %s", "yes" if admin_present else "no")
            purge_expired_sessions(store)
        except Exception:
            logger.exception("[BOOTSTRAP] Admin bootstrap failed; continuing startup.")
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.session_cookie_secure,
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s in %.0fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.exception_handler(CanteenError)
async def canteen_error_handler(_request: Request, exc: CanteenError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("[STORE] %s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Database operation failed"})


app.include_router(api_router, prefix="/api")


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run("canteen.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
