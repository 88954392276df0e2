"""
NGO Site Backend - Shared API Schemas
=====================================

What:  Response models shared by every resource: errors, delete
       acknowledgements and the health document.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for API models: camelCase on the wire, snake_case in Python.

    Input accepts either spelling (imageRef or image_ref).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API failures.

    Example:
        {
            "error": "not_found",
            "message": "Member with ID '9f1c...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class DeleteResponse(BaseModel):
    success: bool = Field(default=True, description="True once the record is gone")


class HealthResponse(BaseModel):
    """Service health: record backend reachability and asset directory status."""
    status: str = Field(description="Overall status: healthy or unhealthy")
    version: str = Field(description="Application version")
    backend: str = Field(description="Record store backend: database or json")
    records: str = Field(description="Record store: connected or disconnected")
    assets: str = Field(description="Asset directory: available or unavailable")
    uptime_seconds: float = Field(description="Seconds since the application was created")
