"""Database handle and request-scoped sessions."""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:  # noqa: ANN001
    # Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest inside a real transaction.
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(conn) -> None:  # noqa: ANN001
    conn.exec_driver_sql("BEGIN")


class Database:
    """Owns the engine and session factory for one process.

    Constructed explicitly at startup and passed down to whoever needs a
    session; :meth:`dispose` releases pooled connections at shutdown.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs) -> None:
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine: Engine = create_engine(url, echo=echo, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _configure_sqlite_connection)
            event.listen(self.engine, "begin", _begin_sqlite_transaction)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def session(self) -> Session:
        """Return a new session bound to this database."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        # Ensure model modules are imported so that metadata is populated.
        import voice_social.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        logger.info("Disposing database engine for %s", self.engine.url.render_as_string())
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection.

    Work that is not committed by the endpoint is rolled back when the
    request finishes.
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
