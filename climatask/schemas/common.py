"""
ClimaTask Backend — Shared Pydantic Schemas
=============================================

What:  The camelCase base model used by every resource schema, plus the
       error, message and health response shapes.

Naming:
    Python attributes are snake_case (user_id, is_completed, created_at);
    the JSON contract is camelCase (userId, isCompleted, createdAt).
    CamelModel generates the aliases; populate_by_name lets request bodies
    use either spelling and lets ORM objects validate by attribute name.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for resource schemas: camelCase on the wire, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain `{"message": ...}` body (liveness)."""
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response raised by the app.

    Example:
        {
            "error": "not_found",
            "message": "User with ID '7' was not found",
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Readiness probe result returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
