"""Error response schemas for consistent API error formatting."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorDetail(BaseModel):
    """One field-level violation."""

    message: str
    path: str
    type: str


class ErrorResponse(BaseModel):
    """Standard error response schema.

    All API errors return this format; ``details`` is only present for
    validation failures.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Literal["error"] = "error"
    status_code: int
    type: str
    message: str
    details: list[ErrorDetail] | None = None
