"""Database handle and session utilities.

The store is an explicitly constructed :class:`Database` object rather than a
module-level engine: the application builds one during its lifespan, stores it
on ``app.state`` and disposes it on shutdown. Tests build their own handle on
an in-memory SQLite database.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from academy.db.base_class import Base

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments suited to *database_url*."""

    url = make_url(database_url)
    options: dict[str, Any] = {"future": True}

    if url.drivername.startswith("sqlite"):
        # Request handlers run in a threadpool, one connection may hop threads.
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # A private in-memory database only lives as long as its single connection.
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True

    return options


def _install_slow_query_logger(engine: Engine, threshold_ms: int) -> None:
    """Attach callbacks that warn when queries exceed the configured budget."""

    if threshold_ms <= 0:
        return

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        context._academy_query_start = perf_counter()

    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start = getattr(context, "_academy_query_start", None)
        if start is None:
            return

        elapsed_ms = (perf_counter() - start) * 1000.0
        if elapsed_ms < threshold_ms:
            return

        snippet = " ".join(statement.split()) if isinstance(statement, str) else str(statement)
        if len(snippet) > 200:
            snippet = snippet[:197] + "..."

        params_preview = repr(parameters)
        if len(params_preview) > 200:
            params_preview = params_preview[:197] + "..."

        logger.warning("Slow SQL (%.1f ms) - %s | params=%s", elapsed_ms, snippet, params_preview)

    event.listen(engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(engine, "after_cursor_execute", _after_cursor_execute)


class Database:
    """Owns the engine and the session factory of one relational store."""

    def __init__(self, database_url: str, *, echo: bool = False, slow_query_threshold_ms: int = 0):
        self.url = database_url
        self.engine: Engine = create_engine(database_url, echo=echo, **_engine_options(database_url))
        _install_slow_query_logger(self.engine, slow_query_threshold_ms)
        self.SessionLocal: sessionmaker[Session] = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_all(self) -> None:
        """Create missing tables; existing ones are left untouched."""
        # Model modules must be imported so their tables are registered.
        import academy.db.base  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        """Close every pooled connection. Safe to call more than once."""
        self.engine.dispose()
        logger.info("Database connections closed (%s)", make_url(self.url).render_as_string(hide_password=True))
