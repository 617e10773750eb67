"""Use-case services sitting between the HTTP layer and the store."""

from .counter_service import CounterService
from .greeting_service import GreetingService

__all__ = ["CounterService", "GreetingService"]
