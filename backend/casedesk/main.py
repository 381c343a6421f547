"""
CaseDesk Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   ``create_app(settings)`` builds the DataStore and TokenService from one
       Settings object, stores all three on ``app.state``, registers
       middleware, exception handlers and routers.
Who:   uvicorn (``uvicorn casedesk.main:create_app --factory``), the
       ``casedesk`` console script, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│ Logging → GZip  │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌────────────┐ ┌────────────────┐   │
    │  │ /api/cases │ │ /api/notes │ │ /api/login     │   │
    │  └────────────┘ └────────────┘ └────────────────┘   │
    │  writes guarded by require_auth (401 / 403)         │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Auth→401 │ Token→403 │ Body→422 │ DB→500     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, log the listen address
    Shutdown:  dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from casedesk import __version__
from casedesk.config import Settings
from casedesk.database import DataStore
from casedesk.exceptions import (
    AuthenticationRequiredError,
    DatabaseError,
    ForbiddenError,
    InvalidCredentialsError,
)
from casedesk.middleware.logging import RequestLoggingMiddleware
from casedesk.middleware.request_id import RequestIDMiddleware, request_id_var
from casedesk.routes import auth, cases, health, notes
from casedesk.services.token_service import TokenService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party loggers that log every request or statement
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("CaseDesk Backend %s starting up", __version__)
    logger.info(
        "Database: %s",
        settings.sqlalchemy_url().render_as_string(hide_password=True),
    )
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("CaseDesk Backend shutting down...")
    await app.state.store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, code: str, details=None) -> dict:
    body = {"error": message, "code": code, "request_id": request_id_var.get("")}
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        AuthenticationRequiredError → 401 + WWW-Authenticate: Bearer
        InvalidCredentialsError     → 401
        ForbiddenError              → 403
        RequestValidationError      → 422
        DatabaseError               → 500 (operation message only)
        Exception (fallback)        → 500

    Driver messages, SQL and stack traces are logged, never returned.
    """

    @app.exception_handler(AuthenticationRequiredError)
    async def handle_missing_token(request: Request, exc: AuthenticationRequiredError):
        return JSONResponse(
            status_code=401,
            content=_error_body(exc.message, "not_authenticated"),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(InvalidCredentialsError)
    async def handle_bad_login(request: Request, exc: InvalidCredentialsError):
        return JSONResponse(
            status_code=401,
            content=_error_body(exc.message, "invalid_credentials"),
        )

    @app.exception_handler(ForbiddenError)
    async def handle_rejected_token(request: Request, exc: ForbiddenError):
        return JSONResponse(
            status_code=403,
            content=_error_body(exc.message, "invalid_token"),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation failed: %s", rid, exc.errors())
        return JSONResponse(
            status_code=422,
            content=_error_body(
                "Invalid request body",
                "validation_error",
                details=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(exc.message, "database_error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred", "internal_server_error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use. When omitted it is read from the
                  environment, which raises if JWT_SECRET or ADMIN_PASSWORD
                  is missing.

    Returns:
        Fully configured FastAPI instance. The database engine is created
        here but connects lazily on the first query.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="CaseDesk API",
        description="Support cases and notes with token-gated writes.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Shared Components ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.store = DataStore.from_settings(settings)
    app.state.token_service = TokenService.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS → routes
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    # Bodies under 500 bytes go out uncompressed
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(cases.router)
    app.include_router(notes.router)

    return app


def main() -> None:
    """Console entry point: ``casedesk`` serves on HOST:PORT from the environment."""
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
