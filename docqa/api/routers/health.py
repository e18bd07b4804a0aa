"""
Health check API endpoint.

Routes: GET /health

Dependencies: fastapi
System role: Liveness HTTP API
"""

from fastapi import APIRouter
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness only; readiness lives under /setup/status."""
    return HealthResponse(status="healthy", message="Server Healthy")
