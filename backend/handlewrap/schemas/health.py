"""
Handlewrap — Health Response Schema
=====================================

What:  Body written by GET /health in the demo application.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status reported by the health handler."""

    status: str = Field(description="Overall service status")
    version: str = Field(description="Package version")
    uptime_seconds: float = Field(description="Seconds since the module was loaded")
