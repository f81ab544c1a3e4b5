"""
FastAPI dependencies shared by the endpoint modules.
"""

from fastapi import Request

from ..services.green_space_service import GreenSpaceService


def get_green_space_service(request: Request) -> GreenSpaceService:
    """Return the service instance created at application startup."""
    return request.app.state.green_space_service
