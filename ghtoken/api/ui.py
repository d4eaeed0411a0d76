"""Routes serving the authorization page.

``GET /`` is the single view. When GitHub redirects back with ``?code=`` the
flow performs the exchange through the relay before the page is rendered.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ghtoken.dependencies import get_authorization_flow
from ghtoken.ui import AuthorizationFlow, render_page

router = APIRouter(tags=["ui"])

NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}


@router.get("/", response_class=HTMLResponse)
async def authorization_page(
    request: Request,
    flow: Annotated[AuthorizationFlow, Depends(get_authorization_flow)],
) -> HTMLResponse:
    await flow.initialize(str(request.url))
    # The body may hold the access token; keep it out of every cache.
    return HTMLResponse(
        render_page(flow, login_path=request.url_for("login").path),
        headers=NO_STORE_HEADERS,
    )


@router.get("/login", name="login")
async def login(
    flow: Annotated[AuthorizationFlow, Depends(get_authorization_flow)],
) -> RedirectResponse:
    """Send the whole window to GitHub's consent screen."""
    return RedirectResponse(url=flow.login(), status_code=HTTPStatus.TEMPORARY_REDIRECT)


__all__ = ["router"]
