"""Persistence layer."""

from .store import GreetingRecord, Store

__all__ = ["GreetingRecord", "Store"]
