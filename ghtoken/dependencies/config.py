"""
FastAPI dependency utilities for injecting configuration.

Settings are built once at process entry by ``create_app`` and kept on the
application state, so handlers never read the environment themselves.
"""

from fastapi import Request

from ghtoken.core.config import AppSettings


def get_app_settings(request: Request) -> AppSettings:
    """FastAPI dependency returning application settings."""
    return request.app.state.settings


__all__ = ["get_app_settings"]
