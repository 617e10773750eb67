# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from sandbox_services.db.session import (
    build_engine,
    build_session_factory,
    create_tables,
    seed_counter,
)
from sandbox_services.main import create_counter_app, create_greeting_app
from sandbox_services.repositories.store import Store


@pytest.fixture()
def engine(tmp_path) -> Generator[Engine, None, None]:
    """File-backed SQLite engine so worker threads get their own connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'sandbox.db'}")
    create_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture()
def store(session_factory: sessionmaker[Session]) -> Store:
    """Store over a provisioned database with the counter at zero."""
    seed_counter(session_factory)
    return Store(session_factory)


@pytest.fixture()
def unseeded_store(session_factory: sessionmaker[Session]) -> Store:
    """Store over a database whose counter row was never provisioned."""
    return Store(session_factory)


@pytest.fixture()
def counter_client(store: Store) -> Iterator[TestClient]:
    with TestClient(create_counter_app(store), base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def greeting_client(store: Store) -> Iterator[TestClient]:
    with TestClient(create_greeting_app(store), base_url="http://test") as test_client:
        yield test_client
