"""Application factories for the counter and greeting services.

Each service runs as its own process with its own engine. The factories take
an already-built :class:`~sandbox_services.repositories.store.Store` so tests
and alternative entry points can supply their own.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import Engine

from sandbox_services import __version__
from sandbox_services.api.endpoints import counter_router, greetings_router
from sandbox_services.repositories.store import Store
from sandbox_services.services.greeting_service import DEFAULT_TEMPLATE

logger = logging.getLogger(__name__)


def _create_app(title: str, description: str, store: Store, engine: Engine | None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if engine is not None:
            engine.dispose()
            logger.info("%s: database pool closed", title)

    app = FastAPI(title=title, description=description, version=__version__, lifespan=lifespan)
    app.state.store = store

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


def create_counter_app(store: Store, engine: Engine | None = None) -> FastAPI:
    """Build the counter service application.

    Args:
        store: Store backing the counter.
        engine: Engine to dispose when the application shuts down.
    """
    app = _create_app("Counter API", "Shared counter read and increment", store, engine)
    app.include_router(counter_router)
    return app


def create_greeting_app(
    store: Store,
    engine: Engine | None = None,
    template: str = DEFAULT_TEMPLATE,
) -> FastAPI:
    """Build the greeting service application.

    Args:
        store: Store backing the greetings table.
        engine: Engine to dispose when the application shuts down.
        template: Greeting message template containing ``{name}``.
    """
    app = _create_app("Greeting API", "Stores and lists greetings", store, engine)
    app.state.greeting_template = template
    app.include_router(greetings_router)
    return app
