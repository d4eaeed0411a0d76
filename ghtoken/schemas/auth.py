"""Schemas related to the GitHub token exchange."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenExchangeRequest(BaseModel):
    """Payload the page posts to the relay."""

    code: Optional[str] = Field(
        None, description="Authorization code returned by GitHub OAuth."
    )


class TokenExchangeResult(BaseModel):
    """The parts of a relayed token response the page cares about."""

    model_config = ConfigDict(extra="ignore")

    access_token: Optional[str] = None
    error: Optional[str] = None


class ErrorPayload(BaseModel):
    error: str


__all__ = ["ErrorPayload", "TokenExchangeRequest", "TokenExchangeResult"]
