"""Pydantic request and response schemas."""

from .counter import CountUpdate
from .greeting import GreetingOut

__all__ = ["CountUpdate", "GreetingOut"]
