"""API request/response models."""

from typing import List
from pydantic import BaseModel, Field


class CleanRequest(BaseModel):
    """Request model for /clean and /analyze endpoints."""

    url: str = Field(..., description="URL to clean")


class BatchCleanRequest(BaseModel):
    """Request model for /clean/batch endpoint."""

    urls: List[str] = Field(..., description="URLs to clean, results keep this order")


class CountResponse(BaseModel):
    """Tracking parameter count for a URL."""

    count: int = Field(..., ge=0)
    badge: str = Field(default="", description="Badge label, empty when nothing to remove")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
