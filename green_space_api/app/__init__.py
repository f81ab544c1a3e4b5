"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (configuration, logging, storage), ``schemas``
(pydantic models), ``services`` (business logic) and ``api``
(versioned FastAPI routers).
"""

from .main import app  # noqa: F401
