"""
GitHub OAuth utilities.

The relay owns the client secret, so the code-for-token exchange happens here
rather than in the browser.
"""

from __future__ import annotations

from urllib.parse import urlencode

import httpx

from ghtoken.core.config import GitHubSettings


class GitHubTokenExchangeError(Exception):
    """Raised when the token endpoint cannot be reached or answers non-2xx."""


class GitHubOAuthClient:
    """Exchange authorization codes against GitHub's token endpoint."""

    AUTH_BASE_URL = "https://github.com/login/oauth/authorize"
    TOKEN_URL = "https://github.com/login/oauth/access_token"

    def __init__(
        self,
        github_settings: GitHubSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._github = github_settings
        self._http_client = http_client

    async def exchange_code(self, code: str) -> httpx.Response:
        """
        Forward an authorization code to GitHub.

        Returns the provider's response untouched. GitHub reports a rejected
        code with a 200 and an ``error`` field, which is not treated as a
        failure here.
        """
        payload = {
            "client_id": self._github.client_id,
            "client_secret": self._github.client_secret,
            "code": code,
        }
        headers = {"Accept": "application/json"}

        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.TOKEN_URL, json=payload, headers=headers
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self.TOKEN_URL, json=payload, headers=headers
                    )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise GitHubTokenExchangeError(str(exc) or type(exc).__name__) from exc

        return response


def build_authorization_url(client_id: str, scope: str) -> str:
    """Construct the GitHub consent URL the browser is sent to."""
    query = urlencode({"client_id": client_id, "scope": scope})
    return f"{GitHubOAuthClient.AUTH_BASE_URL}?{query}"


__all__ = [
    "GitHubOAuthClient",
    "GitHubTokenExchangeError",
    "build_authorization_url",
]
