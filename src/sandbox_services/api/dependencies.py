"""Shared API dependencies wiring the store into the services."""

from typing import Annotated

from fastapi import Depends, Request

from sandbox_services.repositories.store import Store
from sandbox_services.services.counter_service import CounterService
from sandbox_services.services.greeting_service import DEFAULT_TEMPLATE, GreetingService


def get_store(request: Request) -> Store:
    """Return the store the application was created with."""
    return request.app.state.store


StoreDep = Annotated[Store, Depends(get_store)]


def get_counter_service(store: StoreDep) -> CounterService:
    """Build the counter service for a request."""
    return CounterService(store)


def get_greeting_service(request: Request, store: StoreDep) -> GreetingService:
    """Build the greeting service for a request."""
    template = getattr(request.app.state, "greeting_template", DEFAULT_TEMPLATE)
    return GreetingService(store, template=template)


CounterServiceDep = Annotated[CounterService, Depends(get_counter_service)]
GreetingServiceDep = Annotated[GreetingService, Depends(get_greeting_service)]
