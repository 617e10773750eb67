"""Data access for the counter and greeting tables.

The store is the only component that talks to the database. Each operation
checks out one session, runs exactly one statement inside its own
transaction and releases the connection on every exit path. Driver failures
are normalized into the :mod:`sandbox_services.core.errors` taxonomy before
they leave this module.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import insert, select, update
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from sandbox_services.core.errors import (
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnavailableError,
)
from sandbox_services.models import Counter, Greeting
from sandbox_services.models.counter import BIGINT_MAX, BIGINT_MIN

__all__ = ["GreetingRecord", "Store"]

logger = logging.getLogger(__name__)

_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


@dataclass(frozen=True)
class GreetingRecord:
    """A stored greeting as returned across the store boundary."""

    id: int
    message: str


@contextmanager
def _normalized_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures raised inside the block."""
    try:
        yield
    except _UNAVAILABLE_ERRORS as exc:
        logger.warning("%s failed, database unavailable: %s", operation, exc)
        raise UnavailableError(f"{operation}: database unavailable") from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            logger.warning("%s failed, connection lost: %s", operation, exc)
            raise UnavailableError(f"{operation}: connection lost") from exc
        logger.error("%s failed: %s", operation, exc, exc_info=True)
        raise InternalError(f"{operation}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        logger.error("%s failed: %s", operation, exc, exc_info=True)
        raise InternalError(f"{operation}: {exc}") from exc


class Store:
    """Narrow persistence interface over a pooled session factory."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize the store with the process-wide session factory."""
        self._session_factory = session_factory

    def read_counter(self) -> int:
        """Return the current counter value.

        Raises:
            NotFoundError: If the counter row has not been provisioned.
            UnavailableError: If the database cannot be reached.
            InternalError: On any other database failure.
        """
        with _normalized_errors("read counter"):
            with self._session_factory() as session, session.begin():
                value = session.scalars(
                    select(Counter.number).order_by(Counter.id).limit(1)
                ).first()
        if value is None:
            raise NotFoundError("counter row is missing; run the schema bootstrap")
        return int(value)

    def apply_counter_delta(self, delta: int) -> None:
        """Add ``delta`` to the counter in a single UPDATE statement.

        The addition happens inside the database (``number = number + delta``)
        so concurrent calls never lose updates.

        Raises:
            InvalidArgumentError: If ``delta`` does not fit in a 64-bit integer.
            NotFoundError: If no counter row was updated.
            UnavailableError: If the database cannot be reached.
            InternalError: On any other database failure.
        """
        if not BIGINT_MIN <= delta <= BIGINT_MAX:
            raise InvalidArgumentError(f"delta {delta} is outside the 64-bit integer range")

        stmt = (
            update(Counter)
            .values(number=Counter.number + delta)
            .execution_options(synchronize_session=False)
        )
        with _normalized_errors("update counter"):
            with self._session_factory() as session, session.begin():
                result = session.execute(stmt)
                updated = result.rowcount
        if updated == 0:
            raise NotFoundError("counter row is missing; run the schema bootstrap")

    def create_greeting(self, message: str) -> GreetingRecord:
        """Insert a greeting and return it with its database-assigned id.

        Raises:
            InvalidArgumentError: If ``message`` is empty.
            UnavailableError: If the database cannot be reached.
            InternalError: On any other database failure.
        """
        if not message:
            raise InvalidArgumentError("greeting message must not be empty")

        stmt = insert(Greeting).values(message=message).returning(Greeting.id, Greeting.message)
        with _normalized_errors("insert greeting"):
            with self._session_factory() as session, session.begin():
                row = session.execute(stmt).one()
        return GreetingRecord(id=row.id, message=row.message)

    def list_greetings(self) -> list[GreetingRecord]:
        """Return a snapshot of every stored greeting ordered by id."""
        stmt = select(Greeting.id, Greeting.message).order_by(Greeting.id)
        with _normalized_errors("list greetings"):
            with self._session_factory() as session, session.begin():
                rows = session.execute(stmt).all()
        return [GreetingRecord(id=row.id, message=row.message) for row in rows]
