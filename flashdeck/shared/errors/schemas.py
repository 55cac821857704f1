"""Pydantic models for error responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Structured details attached to an error."""

    model_config = ConfigDict(extra="allow")

    field: str | None = None
    value: Any | None = None
    constraint: str | None = None
    resource_id: str | None = None
    resource_type: str | None = None
    errors: list[dict[str, Any]] | None = None
    service: str | None = None


class ErrorResponse(BaseModel):
    """Unified error response body."""

    error: str = Field(..., description="Error code (SNAKE_CASE)")
    message: str = Field(..., description="Human-readable error description")
    details: dict[str, Any] = Field(default_factory=dict)
    trace_id: str = Field(default="", description="Request correlation ID")
