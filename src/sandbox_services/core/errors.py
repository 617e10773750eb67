"""Transport-agnostic error taxonomy shared by the store and the services.

Every failure leaving the store boundary is one of the four kinds below. The
HTTP projection of these kinds lives in :mod:`sandbox_services.api.errors`.
"""

from __future__ import annotations

__all__ = [
    "StoreError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnavailableError",
    "InternalError",
]


class StoreError(RuntimeError):
    """Base exception for failures surfaced by the store and services."""

    kind = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(StoreError):
    """Raised for malformed or empty input. Always a client fault."""

    kind = "invalid_argument"


class NotFoundError(StoreError):
    """Raised when the counter singleton row is missing.

    This is a provisioning fault, not a runtime race: request traffic never
    creates or deletes the row.
    """

    kind = "not_found"


class UnavailableError(StoreError):
    """Raised when the backend cannot be reached or the statement was cancelled."""

    kind = "unavailable"


class InternalError(StoreError):
    """Raised for any other backend failure."""

    kind = "internal"
