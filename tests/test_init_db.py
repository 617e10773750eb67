"""Tests for the provisioning script."""

import pytest

from sandbox_services.repositories.store import Store
from sandbox_services.db.session import build_engine, build_session_factory
from sandbox_services.scripts import init_db


def test_normalize_strips_driver_and_quotes() -> None:
    url = "'postgresql+psycopg://u:p@h:5432/sandbox?sslmode=disable'"
    assert init_db.normalize_to_psycopg(url) == "postgresql://u:p@h:5432/sandbox?sslmode=disable"


@pytest.mark.parametrize("url", ["", "   ", "sqlite:///x.db"])
def test_normalize_rejects_non_postgres(url) -> None:
    with pytest.raises(ValueError):
        init_db.normalize_to_psycopg(url)


def test_split_db_url_targets_maintenance_database() -> None:
    admin_url, target = init_db.split_db_url("postgresql+psycopg://u:p@h:5432/sandbox")
    assert admin_url == "postgresql://u:p@h:5432/postgres"
    assert target == "sandbox"


def test_provision_creates_tables_and_counter(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'fresh.db'}"

    assert init_db.provision(url, initial_count=4) is True
    assert init_db.provision(url) is False

    engine = build_engine(url)
    try:
        store = Store(build_session_factory(engine))
        assert store.read_counter() == 4
        assert store.list_greetings() == []
    finally:
        engine.dispose()


def test_provision_reset_drops_existing_rows(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'reset.db'}"
    init_db.provision(url, initial_count=1)

    engine = build_engine(url)
    try:
        Store(build_session_factory(engine)).create_greeting("Hello, Ada!")
    finally:
        engine.dispose()

    assert init_db.provision(url, reset=True) is True


def test_main_reports_failure(mocker, capsys) -> None:
    mocker.patch.object(init_db, "provision", side_effect=RuntimeError("no database"))

    with pytest.raises(SystemExit) as excinfo:
        init_db.main(["--url", "sqlite://"])

    assert excinfo.value.code == 1
    assert "no database" in capsys.readouterr().err


def test_main_creates_database_when_asked(mocker) -> None:
    ensure = mocker.patch.object(init_db, "ensure_database_exists")
    provision = mocker.patch.object(init_db, "provision", return_value=True)

    init_db.main(["--url", "postgresql+psycopg://u:p@h/sandbox", "--create-database"])

    ensure.assert_called_once_with("postgresql+psycopg://u:p@h/sandbox")
    provision.assert_called_once_with(
        "postgresql+psycopg://u:p@h/sandbox", reset=False, initial_count=0
    )
