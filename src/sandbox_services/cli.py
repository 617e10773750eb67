"""Command-line entry points for the two service processes."""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import uvicorn
from fastapi import FastAPI
from sqlalchemy import Engine

from sandbox_services.core.errors import UnavailableError
from sandbox_services.core.logging import configure_logging
from sandbox_services.core.settings import Settings, settings, split_address
from sandbox_services.db.session import build_session_factory, engine_from_settings, ping
from sandbox_services.main import create_counter_app, create_greeting_app
from sandbox_services.repositories.store import Store

logger = logging.getLogger(__name__)

# argparse destination -> Settings field
_DB_FLAGS = {
    "db_host": "db_host",
    "db_port": "db_port",
    "db_user": "db_user",
    "db_password": "db_password",
    "db_dbname": "db_name",
    "db_sslmode": "db_sslmode",
}


def build_counter_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the shared counter over HTTP")
    parser.add_argument(
        "--address",
        default=None,
        help="HOST:PORT to listen on (defaults to COUNTER_ADDRESS, 127.0.0.1:8081)",
    )
    return parser


def build_greeter_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the greeting API over HTTP")
    parser.add_argument(
        "--address",
        default=None,
        help="HOST:PORT to listen on (defaults to GREETING_ADDRESS, 0.0.0.0:8080)",
    )
    parser.add_argument("--db-host", default=None, help="Database host")
    parser.add_argument("--db-port", type=int, default=None, help="Database port")
    parser.add_argument("--db-user", default=None, help="Database user")
    parser.add_argument("--db-password", default=None, help="Database password")
    parser.add_argument("--db-dbname", default=None, help="Database name")
    parser.add_argument(
        "--db-sslmode",
        default=None,
        choices=["disable", "require", "verify-ca", "verify-full"],
        help="SSL mode for the database connection",
    )
    return parser


def apply_overrides(base: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of ``base`` with every flag given on the command line applied."""
    update = {
        field: getattr(args, dest)
        for dest, field in _DB_FLAGS.items()
        if getattr(args, dest, None) is not None
    }
    return base.model_copy(update=update)


def _serve(app: FastAPI, address: str) -> None:
    host, port = split_address(address)
    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


def _open_store(config: Settings) -> tuple[Store, Engine]:
    engine = engine_from_settings(config)
    try:
        ping(engine)
    except UnavailableError as exc:
        engine.dispose()
        logger.critical("Database is not reachable: %s", exc)
        sys.exit(1)
    return Store(build_session_factory(engine)), engine


def counter_main(argv: Sequence[str] | None = None) -> None:
    """Run the counter service until interrupted."""
    args = build_counter_parser().parse_args(argv)
    configure_logging(settings.log_level, settings.log_json)

    store, engine = _open_store(settings)
    app = create_counter_app(store, engine=engine)
    _serve(app, args.address or settings.counter_address)


def greeter_main(argv: Sequence[str] | None = None) -> None:
    """Run the greeting service until interrupted."""
    args = build_greeter_parser().parse_args(argv)
    config = apply_overrides(settings, args)
    configure_logging(config.log_level, config.log_json)

    store, engine = _open_store(config)
    app = create_greeting_app(store, engine=engine, template=config.greeting_template)
    _serve(app, args.address or config.greeting_address)

