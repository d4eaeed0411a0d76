"""
Factory functions to provide clients as FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends

from ghtoken.clients import GitHubOAuthClient, RelayClient
from ghtoken.core.config import AppSettings
from ghtoken.ui import AuthorizationFlow

from .config import get_app_settings

SettingsDep = Annotated[AppSettings, Depends(get_app_settings)]


def get_github_oauth_client(settings: SettingsDep) -> GitHubOAuthClient:
    """Provide a GitHub OAuth client holding the app credentials."""
    return GitHubOAuthClient(settings.github)


def get_relay_client(settings: SettingsDep) -> RelayClient:
    """Provide the HTTP client the page uses to reach the relay."""
    return RelayClient(str(settings.ui.relay_base_url))


def get_authorization_flow(
    settings: SettingsDep,
    relay: Annotated[RelayClient, Depends(get_relay_client)],
) -> AuthorizationFlow:
    """Build a fresh flow; one exists per page load."""
    return AuthorizationFlow(
        relay,
        client_id=settings.public_client_id,
        scope=settings.ui.scope,
    )


__all__ = [
    "get_authorization_flow",
    "get_github_oauth_client",
    "get_relay_client",
]
