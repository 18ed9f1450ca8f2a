"""FastAPI application entrypoint and error rendering.

Invariants:
- Every API error body carries a `message` string and an `error` kind.
- Store failures never leak internal detail to clients; the cause is logged.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.router import api_router
from app.api.routes import health
from app.core.config import settings
from app.core.errors import APIError, InternalError, InvalidFieldValue
from app.core.logging import configure_logging
from app.db.session import engine

logger = logging.getLogger("app.main")


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    logger.info("Starting %s (%s)", settings.app_name, settings.environment)
    yield
    await engine.dispose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(api_router, prefix=settings.api_prefix)


@app.exception_handler(APIError)
async def _render_api_error(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload(), headers=exc.headers)


@app.exception_handler(SQLAlchemyError)
async def _render_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Unhandled store error on %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


@app.exception_handler(RequestValidationError)
async def _render_request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"] or ["body"]
        errors.setdefault(".".join(loc), error.get("msg", "Invalid value"))
    error = InvalidFieldValue(errors=errors)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())
