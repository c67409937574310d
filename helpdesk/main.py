"""FastAPI application factory and app configuration for the helpdesk service.

`create_app()` builds the FastAPI app, configures CORS, registers the error
handlers and routers, and owns the per-app `SessionStore`. On startup the
lifespan handler creates the tables and seeds the demo users
(`SEED_DEMO_USERS`, on by default).
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from helpdesk.database import SessionLocal, init_db
from helpdesk.errors import HelpdeskError, error_payload, make_validation_error_response
from helpdesk.routers import auth, messages, system, tickets, uploads
from helpdesk.seed import seed_demo_users
from helpdesk.sessions import SessionStore
from helpdesk.storage import S3ObjectStore

logger = logging.getLogger(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

SEED_DEMO_USERS = os.getenv("SEED_DEMO_USERS", "1").lower() not in ("0", "false", "no")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan startup: initializing database")
    init_db()
    if SEED_DEMO_USERS:
        db = SessionLocal()
        try:
            seed_demo_users(db)
        finally:
            db.close()
    yield
    logger.info("Lifespan shutdown: %d session(s) discarded", len(app.state.sessions))


def _allowed_origins() -> List[str]:
    origins = os.getenv("CORS_ORIGINS", "*")
    if origins == "*":
        return ["*"]
    # comma separated list
    return [o.strip() for o in origins.split(",") if o.strip()]


async def helpdesk_error_handler(request: Request, exc: HelpdeskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.code, exc.message, exc.details))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Return a standardized validation error payload
    return JSONResponse(status_code=422, content=make_validation_error_response(exc.errors()))


def create_app(session_store: Optional[SessionStore] = None, object_store: Optional[S3ObjectStore] = None) -> FastAPI:
    """Build an application instance with its own session store.

    `object_store` defaults to an S3 store built from the environment on first upload.
    """
    app = FastAPI(title="Helpdesk API", version="1.0.0", lifespan=lifespan)
    app.state.sessions = session_store if session_store is not None else SessionStore()
    app.state.object_store = object_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(HelpdeskError, helpdesk_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    for module in (system, auth, uploads, tickets, messages):
        app.include_router(module.router)
        logger.debug("Included router: %s", module.__name__)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))


__all__ = ["app", "create_app", "run"]
