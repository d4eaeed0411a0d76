"""
FastAPI routes for the token relay.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from ghtoken.clients.github_auth import GitHubTokenExchangeError
from ghtoken.dependencies import get_github_oauth_client
from ghtoken.schemas import ErrorPayload, TokenExchangeRequest

router = APIRouter()
logger = logging.getLogger(__name__)

CODE_REQUIRED = "Code is required"
EXCHANGE_FAILED = "Failed to exchange code for token"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorPayload(error=message).model_dump()
    )


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post(
    "/github/token",
    status_code=HTTPStatus.OK,
    responses={
        400: {"model": ErrorPayload},
        500: {"model": ErrorPayload},
    },
)
async def exchange_github_token(
    oauth_client: Annotated[Any, Depends(get_github_oauth_client)],
    payload: Optional[TokenExchangeRequest] = None,
) -> Response:
    """
    Exchange an authorization code for an access token on behalf of the page.

    GitHub's response body is relayed byte for byte; a rejected code comes
    back as a 200 with an ``error`` field for the caller to interpret.
    """
    if payload is None or not payload.code:
        return error_response(HTTPStatus.BAD_REQUEST, CODE_REQUIRED)

    try:
        upstream = await oauth_client.exchange_code(payload.code)
    except GitHubTokenExchangeError:
        logger.exception("Token exchange error")
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, EXCHANGE_FAILED)

    return Response(
        content=upstream.content,
        status_code=HTTPStatus.OK,
        media_type=upstream.headers.get("content-type", "application/json"),
    )


__all__ = ["CODE_REQUIRED", "EXCHANGE_FAILED", "error_response", "router"]
