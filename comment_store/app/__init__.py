"""
Application package initializer.

Contains the FastAPI application for the comment store: configuration
and persistence under ``core``, schemas, the service layer and the
HTTP routes under ``api``.
"""

from .main import app  # noqa: F401
