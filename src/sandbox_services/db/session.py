"""Database engine and session configuration.

The services never share a module-level engine: each process builds one
engine (one connection pool) at start-up and hands its session factory to the
store explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, create_engine, event, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from sandbox_services.core.errors import UnavailableError
from sandbox_services.core.settings import Settings

logger = logging.getLogger(__name__)

# Seconds a SQLite connection waits on a locked database before failing.
SQLITE_BUSY_TIMEOUT = 30.0


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import sandbox_services.models  # noqa: E402,F401


def _use_immediate_transactions(engine: Engine) -> None:
    """Make SQLite take the write lock when a transaction begins.

    pysqlite defers BEGIN until the first DML statement, which lets two
    writers deadlock on lock promotion. Taking the lock up front makes
    concurrent writers wait on the busy timeout instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(
    url: str,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 30.0,
    statement_timeout_ms: int = 0,
    echo: bool = False,
) -> Engine:
    """Create the engine (and its connection pool) for one service process.

    Args:
        url: SQLAlchemy database URL.
        pool_size: Connections kept open in the pool.
        max_overflow: Extra connections allowed beyond ``pool_size``.
        pool_timeout: Seconds to wait for a free connection before failing.
        statement_timeout_ms: Server-side statement timeout for PostgreSQL;
            ``0`` disables it.
        echo: Log every emitted statement.
    """
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
            echo=echo,
        )
        _use_immediate_transactions(engine)
        return engine

    connect_args: dict[str, Any] = {}
    if statement_timeout_ms > 0:
        connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        connect_args=connect_args,
        echo=echo,
    )


def engine_from_settings(settings: Settings) -> Engine:
    """Create an engine from application settings."""
    return build_engine(
        settings.effective_database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        statement_timeout_ms=settings.db_statement_timeout_ms,
        echo=settings.sql_debug,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return the session factory the store checks sessions out of."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def ping(engine: Engine) -> None:
    """Verify that the database is reachable.

    Raises:
        UnavailableError: If a connection cannot be opened or ``SELECT 1`` fails.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise UnavailableError(f"could not connect to the database: {exc}") from exc


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)


def seed_counter(session_factory: sessionmaker[Session], value: int = 0) -> bool:
    """Provision the counter singleton row if it does not exist yet.

    Returns:
        ``True`` if the row was created, ``False`` if it was already present.
    """
    from sandbox_services.models.counter import Counter

    with session_factory() as session, session.begin():
        if session.scalars(select(Counter.id).limit(1)).first() is not None:
            return False
        session.add(Counter(id=1, number=value))
    logger.info("Provisioned counter row with value %d", value)
    return True
