"""Tests for the store: statements, snapshots and error normalization."""

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from sandbox_services.core.errors import (
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnavailableError,
)
from sandbox_services.models import Counter, Greeting
from sandbox_services.repositories.store import GreetingRecord, Store


def test_read_counter_starts_at_seeded_value(store) -> None:
    assert store.read_counter() == 0


def test_apply_counter_delta_adds_in_place(store) -> None:
    store.apply_counter_delta(7)
    store.apply_counter_delta(-10)
    assert store.read_counter() == -3


def test_counter_holds_64_bit_values(store) -> None:
    big = 2**62
    store.apply_counter_delta(big)
    store.apply_counter_delta(big - 1)
    assert store.read_counter() == 2**63 - 1


def test_consecutive_reads_agree(store) -> None:
    store.apply_counter_delta(3)
    assert store.read_counter() == store.read_counter() == 3


def test_missing_counter_row_is_not_found(unseeded_store) -> None:
    with pytest.raises(NotFoundError):
        unseeded_store.read_counter()
    with pytest.raises(NotFoundError):
        unseeded_store.apply_counter_delta(1)


def test_counter_row_removed_after_provisioning(store, session_factory) -> None:
    with session_factory() as session, session.begin():
        session.execute(delete(Counter))

    with pytest.raises(NotFoundError):
        store.read_counter()


def test_create_greeting_returns_assigned_id(store) -> None:
    first = store.create_greeting("Hello, Ada!")
    second = store.create_greeting("Hello, Grace!")

    assert isinstance(first, GreetingRecord)
    assert first.message == "Hello, Ada!"
    assert second.id > first.id


def test_create_greeting_rejects_empty_message(store, session_factory) -> None:
    with pytest.raises(InvalidArgumentError):
        store.create_greeting("")

    with session_factory() as session:
        assert session.query(Greeting).count() == 0


def test_list_greetings_empty_store(store) -> None:
    assert store.list_greetings() == []


def test_list_greetings_is_a_materialized_snapshot(store) -> None:
    created = [store.create_greeting(f"Hello, {name}!") for name in ("a", "b", "c")]

    listed = store.list_greetings()
    store.create_greeting("Hello, d!")

    assert isinstance(listed, list)
    assert listed == created
    after = store.list_greetings()
    assert len(after) == 4
    assert after[:3] == listed


def test_greeting_message_is_stored_verbatim(store) -> None:
    message = "Hello, <b>'; DROP TABLE greetings; --</b>!"
    greeting = store.create_greeting(message)

    assert store.list_greetings() == [GreetingRecord(id=greeting.id, message=message)]


@pytest.mark.parametrize(
    "error",
    [
        OperationalError("SELECT 1", {}, Exception("connection refused")),
        InterfaceError("SELECT 1", {}, Exception("connection closed")),
        PoolTimeoutError("QueuePool limit reached"),
    ],
)
def test_connectivity_failures_are_unavailable(mocker, error) -> None:
    factory = mocker.MagicMock(side_effect=error)
    store = Store(factory)

    with pytest.raises(UnavailableError) as excinfo:
        store.read_counter()
    assert excinfo.value.__cause__ is error

    with pytest.raises(UnavailableError):
        store.apply_counter_delta(1)


def test_other_backend_failures_are_internal(mocker) -> None:
    error = IntegrityError("INSERT", {}, Exception("constraint failed"))
    store = Store(mocker.MagicMock(side_effect=error))

    with pytest.raises(InternalError):
        store.create_greeting("Hello, Ada!")
    with pytest.raises(InternalError):
        store.list_greetings()


def test_invalidated_connection_is_unavailable(mocker) -> None:
    error = IntegrityError("UPDATE", {}, Exception("server closed the connection"))
    error.connection_invalidated = True
    store = Store(mocker.MagicMock(side_effect=error))

    with pytest.raises(UnavailableError):
        store.apply_counter_delta(1)


def test_session_is_released_after_failure(mocker, session_factory) -> None:
    session = session_factory()
    close = mocker.spy(session, "close")
    mocker.patch.object(
        session,
        "execute",
        side_effect=OperationalError("UPDATE", {}, Exception("statement timeout")),
    )
    store = Store(mocker.MagicMock(return_value=session))

    with pytest.raises(UnavailableError):
        store.apply_counter_delta(5)
    close.assert_called()


@pytest.mark.parametrize("delta", [2**63, -(2**63) - 1, 2**70])
def test_out_of_range_delta_is_invalid_argument(store, delta) -> None:
    with pytest.raises(InvalidArgumentError):
        store.apply_counter_delta(delta)

    assert store.read_counter() == 0


def test_int64_bounds_are_accepted(store) -> None:
    store.apply_counter_delta(-(2**63))
    assert store.read_counter() == -(2**63)
