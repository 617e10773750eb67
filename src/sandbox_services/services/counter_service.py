"""Service-level operations for the shared counter."""
from __future__ import annotations

import logging

from sandbox_services.repositories.store import Store

__all__ = ["CounterService"]

logger = logging.getLogger(__name__)


class CounterService:
    """Read and increment the shared counter.

    The service keeps no copy of the value; every call goes to the store.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def get_count(self) -> int:
        """Return the current counter value.

        Store failures propagate unchanged; a failed read is never reported as
        a zero count.
        """
        return self.store.read_counter()

    def increment_count(self, delta: int) -> None:
        """Apply ``delta`` to the counter. Negative deltas decrement it."""
        self.store.apply_counter_delta(delta)
        logger.info("Counter changed by %d", delta)
