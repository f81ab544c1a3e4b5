"""
Health endpoint for API v1.

``GET /health`` returns 200 while the process is up and the database
answers a trivial query through the shared service.
"""

from fastapi import APIRouter, Depends, Request, status

from green_space_api.app.core.dependencies import get_green_space_service
from green_space_api.app.services.green_space_service import GreenSpaceService

router = APIRouter()


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(
    request: Request,
    service: GreenSpaceService = Depends(get_green_space_service),
) -> dict:
    return {
        "status": "ok",
        "version": request.app.version,
        "green_spaces": service.count_green_spaces(),
    }
