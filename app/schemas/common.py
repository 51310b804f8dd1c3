"""Envelopes shared across routers."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """``{success, message}`` envelope."""

    success: bool = True
    message: str


class HealthCheckResponse(BaseModel):
    """Application health payload."""

    status: str = Field(..., description="ok or degraded")
    version: str
    timestamp: str
    database: str = Field(..., description="connected or unavailable")
