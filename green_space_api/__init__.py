"""
Top-level package for the Green Space API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``green_space_api.app.main:app``.
"""

__all__ = []
