"""Client used by the authorization page to reach the token relay over HTTP."""

from __future__ import annotations

import httpx

from pydantic import ValidationError

from ghtoken.schemas import TokenExchangeResult


class RelayTransportError(Exception):
    """Raised when the relay cannot be reached or returns an unreadable body."""


class RelayClient:
    TOKEN_PATH = "/api/github/token"

    def __init__(
        self, base_url: str, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client

    @property
    def token_url(self) -> str:
        return f"{self._base_url}{self.TOKEN_PATH}"

    async def exchange(self, code: str) -> TokenExchangeResult:
        """POST the code to the relay and parse whatever JSON body it returns.

        Error statuses (400/500) still carry a JSON ``error`` body, so the
        status code itself is not inspected.
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.token_url, json={"code": code}
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self.token_url, json={"code": code})
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise RelayTransportError(str(exc) or type(exc).__name__) from exc

        try:
            return TokenExchangeResult.model_validate(body)
        except ValidationError:
            # Readable but unexpected JSON carries no token and no usable error.
            return TokenExchangeResult()


__all__ = ["RelayClient", "RelayTransportError"]
