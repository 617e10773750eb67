"""Provision the database used by the counter and greeting services."""
from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql

from sandbox_services.core.settings import settings
from sandbox_services.db.session import (
    build_engine,
    build_session_factory,
    create_tables,
    drop_tables,
    seed_counter,
)


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for psycopg.connect().

    - Strips quotes and whitespace.
    - Converts SQLAlchemy schemes (postgresql+*) to plain "postgresql".
    """
    uri = (uri or "").strip()
    if (uri.startswith("'") and uri.endswith("'")) or (uri.startswith('"') and uri.endswith('"')):
        uri = uri[1:-1]
    if not uri:
        raise ValueError("database URL is empty")

    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme.startswith("postgresql+"):
        scheme = "postgresql"
    if scheme != "postgresql":
        raise ValueError(f"Not a PostgreSQL URL: {uri!r}")

    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def split_db_url(db_url: str) -> tuple[str, str]:
    """Return `(admin_url, target_db)` using the maintenance database."""
    parts = urlsplit(normalize_to_psycopg(db_url))
    target_db = parts.path.lstrip("/") or "postgres"

    if parts.netloc:
        admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, ""))
    else:
        # hostless/local-socket style
        admin_url = "postgresql:///postgres"

    return admin_url, target_db


def ensure_database_exists(db_url: str) -> None:
    """Create the configured database if it is missing."""
    admin_url, target_db = split_db_url(db_url)

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
            print(f"[init_db] created database {target_db}")
        else:
            print(f"[init_db] database {target_db} already exists")


def provision(db_url: str, *, reset: bool = False, initial_count: int = 0) -> bool:
    """Create both tables and seed the counter row.

    Args:
        db_url: SQLAlchemy database URL.
        reset: Drop the tables first.
        initial_count: Value of a newly provisioned counter row.

    Returns:
        ``True`` if the counter row was created by this call.
    """
    engine = build_engine(db_url)
    try:
        if reset:
            drop_tables(engine)
        create_tables(engine)
        return seed_counter(build_session_factory(engine), initial_count)
    finally:
        engine.dispose()


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the tables and the counter row")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to the effective settings URL)",
    )
    parser.add_argument(
        "--create-database",
        action="store_true",
        help="Create the PostgreSQL database first if it does not exist.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop the counter and greeting tables before recreating them.",
    )
    parser.add_argument(
        "--initial-count",
        type=int,
        default=0,
        help="Value of the counter row when it is created.",
    )
    args = parser.parse_args(argv)

    db_url = args.url or settings.effective_database_url
    try:
        if args.create_database:
            ensure_database_exists(db_url)
        created = provision(db_url, reset=args.reset, initial_count=args.initial_count)
    except Exception as exc:
        print(f"[init_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    if created:
        print("[init_db] counter row created")
    else:
        print("[init_db] counter row already present")


if __name__ == "__main__":
    main()
