"""Counter-related Pydantic schemas."""

from pydantic import BaseModel, Field

from sandbox_services.models.counter import BIGINT_MAX, BIGINT_MIN


class CountUpdate(BaseModel):
    """Body of a counter update request."""

    count: int = Field(
        ...,
        strict=True,
        ge=BIGINT_MIN,
        le=BIGINT_MAX,
        description="Signed amount added to the counter",
    )
