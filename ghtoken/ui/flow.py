"""
Authorization page state machine.

One ``AuthorizationFlow`` exists per page load. ``initialize`` reads the
``code`` query parameter exactly once and, when present, performs the single
exchange against the relay. Success and Failed are terminal.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol
from urllib.parse import parse_qs, urlsplit

from ghtoken.clients.github_auth import build_authorization_url
from ghtoken.clients.relay import RelayTransportError
from ghtoken.schemas import TokenExchangeResult
from ghtoken.ui.state import Failed, Idle, Loading, Success, ViewState

logger = logging.getLogger(__name__)


class FlowAlreadyInitializedError(RuntimeError):
    """Raised when ``initialize`` is called a second time for the same page."""


class InvalidFlowStateError(RuntimeError):
    """Raised when an action is invoked from a state that does not offer it."""


class TokenRelay(Protocol):
    async def exchange(self, code: str) -> TokenExchangeResult:
        ...


class Clipboard(Protocol):
    async def write_text(self, text: str) -> None:
        ...


class CopyAcknowledgement:
    """Copy a value and show "Copied!" until a one-shot timer resets the label."""

    DEFAULT_LABEL = "Copy"
    COPIED_LABEL = "Copied!"

    def __init__(self, clipboard: Clipboard, *, reset_after: float = 2.0) -> None:
        self._clipboard = clipboard
        self._reset_after = reset_after
        self._copied = False
        self._reset_handle: Optional[asyncio.TimerHandle] = None

    @property
    def copied(self) -> bool:
        return self._copied

    @property
    def label(self) -> str:
        return self.COPIED_LABEL if self._copied else self.DEFAULT_LABEL

    @property
    def reset_after_ms(self) -> int:
        return int(round(self._reset_after * 1000))

    async def copy(self, value: str) -> None:
        await self._clipboard.write_text(value)
        self._copied = True
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(self._reset_after, self._reset)

    def _reset(self) -> None:
        self._copied = False
        self._reset_handle = None


class AuthorizationFlow:
    FALLBACK_ERROR = "Failed to get access token"
    TRANSPORT_ERROR = "Failed to exchange code for token"

    def __init__(
        self,
        relay: TokenRelay,
        *,
        client_id: str,
        scope: str,
        clipboard: Optional[Clipboard] = None,
        copy_ack_seconds: float = 2.0,
    ) -> None:
        self._relay = relay
        self._client_id = client_id
        self._scope = scope
        self._state: ViewState = Idle()
        self._initialized = False
        self._display_url: Optional[str] = None
        self.copy_ack = CopyAcknowledgement(
            clipboard or _NullClipboard(), reset_after=copy_ack_seconds
        )

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def display_url(self) -> Optional[str]:
        """URL the browser should show; the query string is dropped on success."""
        return self._display_url

    async def initialize(self, url: str) -> ViewState:
        if self._initialized:
            raise FlowAlreadyInitializedError("Authorization flow already initialized.")
        self._initialized = True
        self._display_url = url

        parsed = urlsplit(url)
        code = parse_qs(parsed.query).get("code", [""])[0]
        if not code:
            return self._state

        self._transition(Loading(code=code))
        await self._exchange(code)
        if isinstance(self._state, Success):
            self._display_url = parsed.path or "/"
        return self._state

    def login(self) -> str:
        """Return the GitHub authorize URL the whole window navigates to."""
        if not isinstance(self._state, Idle):
            raise InvalidFlowStateError("Login is only available before a code is present.")
        return build_authorization_url(self._client_id, self._scope)

    async def copy(self) -> None:
        if not isinstance(self._state, Success):
            raise InvalidFlowStateError("Nothing to copy until a token is obtained.")
        await self.copy_ack.copy(self._state.access_token)

    async def _exchange(self, code: str) -> None:
        try:
            result = await self._relay.exchange(code)
        except RelayTransportError as exc:
            logger.warning("Token exchange error: %s", exc)
            self._transition(Failed(message=self.TRANSPORT_ERROR))
            return

        if result.access_token:
            self._transition(Success(access_token=result.access_token))
        else:
            self._transition(Failed(message=result.error or self.FALLBACK_ERROR))

    def _transition(self, new_state: ViewState) -> None:
        logger.debug("Authorization flow %s -> %s", self._state.status, new_state.status)
        self._state = new_state


class _NullClipboard:
    """Clipboard used when the page runs server-side; the browser does the copy."""

    async def write_text(self, text: str) -> None:
        return None


__all__ = [
    "AuthorizationFlow",
    "Clipboard",
    "CopyAcknowledgement",
    "FlowAlreadyInitializedError",
    "InvalidFlowStateError",
    "TokenRelay",
]
