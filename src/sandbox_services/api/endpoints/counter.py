"""Counter endpoints.

``GET /count`` returns the value as a bare text body; ``POST /count`` applies
the ``count`` field of a JSON body as a delta and returns no payload.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from sandbox_services.api.dependencies import CounterServiceDep
from sandbox_services.api.errors import http_error
from sandbox_services.core.errors import StoreError
from sandbox_services.schemas.counter import CountUpdate

router = APIRouter(prefix="/count", tags=["counter"])


@router.get(
    path="",
    response_class=PlainTextResponse,
    summary="Read the counter",
)
def read_count(service: CounterServiceDep) -> str:
    """Return the current counter value as plain text."""
    try:
        value = service.get_count()
    except StoreError as exc:
        raise http_error(exc) from exc
    return str(value)


@router.post(
    path="",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Add a delta to the counter",
)
def update_count(payload: CountUpdate, service: CounterServiceDep) -> Response:
    """Apply ``payload.count`` to the counter.

    Args:
        payload: Body carrying the signed delta.
        service: Counter service injected by FastAPI.

    Raises:
        HTTPException: If the store rejects or fails the update.
    """
    try:
        service.increment_count(payload.count)
    except StoreError as exc:
        raise http_error(exc) from exc
    return Response(status_code=status.HTTP_201_CREATED)
