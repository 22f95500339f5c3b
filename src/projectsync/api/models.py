"""Pydantic models for the HTTP API."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""

    status: str
    project_id: str
    fields: int
