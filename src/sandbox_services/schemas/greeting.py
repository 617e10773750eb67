"""Greeting-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class GreetingOut(BaseModel):
    """Schema for a stored greeting returned by the API."""

    id: int
    message: str

    model_config = ConfigDict(from_attributes=True)
