"""
CaseDesk Backend: Shared Response Schemas
=========================================

What:  Response models reused across resources: write confirmations, the
       error envelope and the health report.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for create/update/delete operations."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error envelope returned by every global exception handler.

    Example:
        {
            "error": "Failed to create case",
            "code": "database_error",
            "request_id": "3f2a9c1d"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[Any] = Field(default=None, description="Field-level validation errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
