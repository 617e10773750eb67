"""SQLAlchemy models for the sandbox services."""

from .counter import Counter
from .greeting import Greeting

__all__ = ["Counter", "Greeting"]
