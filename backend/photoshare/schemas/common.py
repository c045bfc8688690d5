"""
PhotoShare Backend — Shared Response Schemas
==============================================

What:  Envelopes used across every route: plain success messages, the error
       body produced by the global exception handlers, and the health report.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        success: Always false
        error: Machine-readable error code (e.g., "forbidden", "not_found")
        message: Human-readable description for display to users
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "success": false,
            "error": "forbidden",
            "message": "Not allowed",
            "request_id": "3f2a9c1e"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    media: str = Field(description="Media host: configured, unconfigured")
    uptime_seconds: float = Field(description="Seconds since service started")
