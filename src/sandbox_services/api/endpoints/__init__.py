"""API endpoint modules."""

from .counter import router as counter_router
from .greetings import router as greetings_router

__all__ = ["counter_router", "greetings_router"]
