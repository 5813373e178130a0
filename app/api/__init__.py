"""API layer package for the FastAPI application, jobs, dashboard and health routes."""

from .application import create_api_application

__all__ = ["create_api_application"]
