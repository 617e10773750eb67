"""Service-level helpers for creating and listing greetings."""
from __future__ import annotations

import logging

from sandbox_services.core.errors import InvalidArgumentError
from sandbox_services.repositories.store import GreetingRecord, Store

__all__ = ["DEFAULT_TEMPLATE", "GreetingService"]

DEFAULT_TEMPLATE = "Hello, {name}!"

logger = logging.getLogger(__name__)


class GreetingService:
    """Create greetings for a name and list the stored ones."""

    def __init__(self, store: Store, template: str = DEFAULT_TEMPLATE) -> None:
        """Initialize the service.

        Args:
            store: Store used to persist greetings.
            template: Message template; ``{name}`` is replaced with the name
                exactly as given, without escaping.
        """
        self.store = store
        self.template = template

    def render(self, name: str) -> str:
        """Return the greeting message for ``name``."""
        return self.template.format(name=name)

    def greet(self, name: str) -> GreetingRecord:
        """Store a greeting for ``name`` and return the persisted record.

        Raises:
            InvalidArgumentError: If ``name`` is empty. Nothing is stored.
        """
        if not name:
            raise InvalidArgumentError("missing 'name' parameter")

        greeting = self.store.create_greeting(self.render(name))
        logger.debug("Stored greeting %d", greeting.id)
        return greeting

    def list_all(self) -> list[GreetingRecord]:
        """Return every stored greeting."""
        return self.store.list_greetings()
