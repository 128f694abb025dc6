"""API request/response schemas for FastAPI endpoints."""

from pydantic import BaseModel, Field

from print_finder.consts import API_VERSION


class ErrorResponse(BaseModel):
    """Body returned with every non-2xx response."""

    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    """Response schema for GET /health endpoint."""

    status: str = Field(default="ok")
    version: str = Field(default=API_VERSION)
