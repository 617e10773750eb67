"""HTTP projection of the store error taxonomy."""

from __future__ import annotations

from fastapi import HTTPException, status

from sandbox_services.core.errors import (
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    StoreError,
    UnavailableError,
)

STATUS_BY_ERROR: dict[type[StoreError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: StoreError) -> int:
    """Return the HTTP status code for a store or service error."""
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def http_error(exc: StoreError) -> HTTPException:
    """Build the ``HTTPException`` reported to the client for ``exc``."""
    return HTTPException(status_code=status_for(exc), detail=exc.message)
