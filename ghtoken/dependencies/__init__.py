"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_authorization_flow,
    get_github_oauth_client,
    get_relay_client,
)
from .config import get_app_settings

__all__ = [
    "get_app_settings",
    "get_authorization_flow",
    "get_github_oauth_client",
    "get_relay_client",
]
