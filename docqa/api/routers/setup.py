"""
Setup status API endpoint.

Routes: GET /setup/status

Dependencies: docqa.application.services.setup_service
System role: Deployment diagnostics HTTP API
"""

from fastapi import APIRouter, Depends

from docqa.api.deps import get_setup_service
from docqa.application.services.setup_service import SetupService
from docqa.models.setup import SetupStatus

router = APIRouter(prefix="/setup", tags=["setup"])


@router.get("/status", response_model=SetupStatus)
async def setup_status(
    setup_service: SetupService = Depends(get_setup_service),
) -> SetupStatus:
    """
    Report chunk store and model backend readiness.

    Always 200; readiness is in the body.
    """
    return await setup_service.status()
