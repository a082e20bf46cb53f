"""Shared API schemas - error body and health payload."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str = Field(description="Human-readable error message")
    timestamp: str = Field(description="ISO-8601 time the error was produced")


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = "healthy"
    timestamp: str
    version: str
