"""
CaseDesk Backend: Data Store Gateway
====================================

What:  Async SQLAlchemy engine, declarative base, and the ``DataStore``
       gateway that every service uses to talk to the database.
How:   ``DataStore.query(statement, parameters)`` runs exactly one SQLAlchemy
       Core statement in its own ``engine.begin()`` block and returns a
       ``QueryResult`` with rows, affected-row count and generated key.
Who:   Built once by ``create_app()`` from ``Settings`` and stored on
       ``app.state.store``; route handlers get it through ``get_store``.

Statement Rules:
    - Statements are SQLAlchemy constructs with bound parameters. Values are
      never formatted into SQL text.
    - One statement per call. There are no multi-statement transactions; a
      failure can only ever affect the statement that raised.
    - Errors are wrapped in ``DatabaseError`` and raised to the caller.
      Nothing is retried.

Connection Pooling:
    pool_size / max_overflow:  bounded number of concurrent connections
    pool_timeout:              how long a request waits for a free connection
    connect timeout:           bound on opening a new connection
    pool_pre_ping:             stale connections are replaced before use
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from casedesk.config import Settings
from casedesk.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for the CaseDesk ORM models.

    The gateway works on ``Model.__table__``; the declarative classes exist
    to describe the schema in one place and to drive ``create_all``.
    """
    pass


@dataclass
class QueryResult:
    """
    Outcome of a single gateway statement.

    Attributes:
        rows:         Result rows as plain dicts (empty for DML statements)
        rowcount:     Rows affected by INSERT/UPDATE/DELETE (-1 if unknown)
        inserted_id:  Primary key generated by an INSERT, if any
    """
    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1
    inserted_id: Optional[Any] = None


# ── Engine Configuration ──────────────────────────────────────────────────
def _connect_args(url: URL, timeout: int) -> Dict[str, Any]:
    """Driver-specific keyword for the connect timeout."""
    if url.get_backend_name() == "mysql":
        return {"connect_timeout": timeout}
    # asyncpg and sqlite3 (aiosqlite) both take ``timeout``
    return {"timeout": timeout}


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the pooled async engine described by ``settings``.

    SQLite (used by the test suite) keeps SQLAlchemy's default pool since
    queue-pool sizing arguments do not apply to it.
    """
    url = settings.sqlalchemy_url()
    kwargs: Dict[str, Any] = {
        "connect_args": _connect_args(url, settings.db_connect_timeout),
        "echo": settings.log_level == "DEBUG",
    }
    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    engine = create_async_engine(url, **kwargs)
    _attach_pool_logging(engine)
    return engine


def _attach_pool_logging(engine: AsyncEngine) -> None:
    """Log pool connection churn on the underlying sync engine."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        logger.debug("Database pool opened a new connection")

    @event.listens_for(engine.sync_engine, "invalidate")
    def _on_invalidate(dbapi_connection, connection_record, exception):
        if exception is not None:
            logger.error("Database pool connection invalidated: %s", exception)


class DataStore:
    """
    Gateway for all persisted records.

    The only component that reads or writes the ``cases`` and ``notes``
    tables. It holds no per-request state; concurrent requests share the
    engine's connection pool.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataStore":
        return cls(build_engine(settings))

    async def query(
        self,
        statement,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> QueryResult:
        """
        Execute one statement and commit it.

        Args:
            statement:   SQLAlchemy Core construct (select/insert/update/delete)
            parameters:  Values bound by name to the statement's parameters

        Returns:
            QueryResult with rows for SELECTs, affected count for DML, and the
            generated key for INSERTs.

        Raises:
            DatabaseError: connection, pool, timeout or driver failure
        """
        try:
            async with self.engine.begin() as conn:
                if parameters is None:
                    result = await conn.execute(statement)
                else:
                    result = await conn.execute(statement, dict(parameters))

                if result.returns_rows:
                    rows = [dict(row) for row in result.mappings().all()]
                    return QueryResult(rows=rows, rowcount=len(rows))

                inserted_id = None
                if getattr(statement, "is_insert", False):
                    primary_key = result.inserted_primary_key
                    if primary_key:
                        inserted_id = primary_key[0]
                return QueryResult(rowcount=result.rowcount, inserted_id=inserted_id)

        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise DatabaseError(
                context={
                    "error_type": type(e).__name__,
                    "detail": str(e),
                    "code": getattr(getattr(e, "orig", None), "sqlstate", None),
                },
            ) from e

    async def ping(self) -> bool:
        """Round-trip ``SELECT 1``; False when the database is unreachable."""
        try:
            await self.query(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.warning("Database ping failed: %s", e.context.get("detail"))
            return False

    async def create_all(self) -> None:
        """
        Create the ``cases`` and ``notes`` tables if they do not exist.

        Used by the test suite and local development against an empty
        database. It only issues CREATE TABLE IF NOT EXISTS; it never alters
        existing tables.
        """
        # Register the models with Base.metadata
        from casedesk.models import case, note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection (called on shutdown)."""
        await self.engine.dispose()


# ── Dependency ────────────────────────────────────────────────────────────
def get_store(request: Request) -> DataStore:
    """
    FastAPI dependency returning the application's DataStore.

    Example usage in a route:
        @router.get("/cases")
        async def list_cases(store: DataStore = Depends(get_store)):
            return await case_service.list_cases(store)
    """
    return request.app.state.store
