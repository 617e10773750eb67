"""Greeting endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from sandbox_services.api.dependencies import GreetingServiceDep
from sandbox_services.api.errors import http_error
from sandbox_services.core.errors import StoreError
from sandbox_services.schemas.greeting import GreetingOut

router = APIRouter(prefix="/api", tags=["greetings"])


@router.get(
    path="/user",
    response_model=GreetingOut,
    summary="Greet a user",
    response_description="The stored greeting with its assigned id.",
)
def greet_user(
    service: GreetingServiceDep,
    name: Annotated[str | None, Query(description="Name to greet")] = None,
) -> GreetingOut:
    """Store a greeting for ``name`` and return it.

    A missing or empty ``name`` is rejected with 400 before anything is stored.
    """
    try:
        greeting = service.greet(name or "")
    except StoreError as exc:
        raise http_error(exc) from exc
    return GreetingOut.model_validate(greeting)


@router.get(
    path="/greetings",
    response_model=list[GreetingOut],
    summary="List all greetings",
)
def list_greetings(service: GreetingServiceDep) -> list[GreetingOut]:
    """Return every stored greeting; an empty store yields ``[]``."""
    try:
        greetings = service.list_all()
    except StoreError as exc:
        raise http_error(exc) from exc
    return [GreetingOut.model_validate(greeting) for greeting in greetings]
