"""
Noteful Backend — Shared Schema Pieces
=======================================

What:  Base model for camelCase JSON plus the error and health response models.
Why:   The public API speaks camelCase (`folderId`, `userId`, `createdAt`)
       while Python code uses snake_case. One base class carries the alias
       configuration so every request/response model agrees.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for all API models.

    - alias_generator: fields serialize as camelCase
    - populate_by_name: services construct models with snake_case names
    - from_attributes: models can be validated straight from ORM rows
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "The `folderId` is not valid",
            "details": {"field": "folderId"},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
