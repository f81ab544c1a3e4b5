"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import green_spaces, health

router = APIRouter()

router.include_router(green_spaces.router, prefix="/green-spaces", tags=["green-spaces"])
router.include_router(health.router, prefix="/health", tags=["health"])
