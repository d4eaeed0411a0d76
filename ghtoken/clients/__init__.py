"""Expose constructed client wrappers."""

from .github_auth import GitHubOAuthClient, GitHubTokenExchangeError
from .relay import RelayClient, RelayTransportError

__all__ = [
    "GitHubOAuthClient",
    "GitHubTokenExchangeError",
    "RelayClient",
    "RelayTransportError",
]
