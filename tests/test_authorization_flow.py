from __future__ import annotations

import anyio
import pytest

from ghtoken.clients.relay import RelayTransportError
from ghtoken.schemas import TokenExchangeResult
from ghtoken.ui import (
    AuthorizationFlow,
    CopyAcknowledgement,
    Failed,
    FlowAlreadyInitializedError,
    Idle,
    InvalidFlowStateError,
    Success,
)

pytestmark = pytest.mark.anyio("asyncio")


class StubRelay:
    def __init__(self, result: TokenExchangeResult | None = None, error=None) -> None:
        self.result = result
        self.error = error
        self.codes: list[str] = []

    async def exchange(self, code: str) -> TokenExchangeResult:
        self.codes.append(code)
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


class MemoryClipboard:
    def __init__(self) -> None:
        self.text: str | None = None

    async def write_text(self, text: str) -> None:
        self.text = text


def _flow(relay: StubRelay, **kwargs) -> AuthorizationFlow:
    return AuthorizationFlow(relay, client_id="public-id", scope="repo", **kwargs)


async def test_without_code_the_flow_stays_idle() -> None:
    relay = StubRelay()
    flow = _flow(relay)

    state = await flow.initialize("http://localhost:5173/")

    assert isinstance(state, Idle)
    assert relay.codes == []
    assert flow.display_url == "http://localhost:5173/"


async def test_empty_code_is_treated_as_absent() -> None:
    relay = StubRelay()
    flow = _flow(relay)

    state = await flow.initialize("http://localhost:5173/?code=")

    assert isinstance(state, Idle)
    assert relay.codes == []


async def test_access_token_moves_flow_to_success_and_strips_query() -> None:
    relay = StubRelay(TokenExchangeResult(access_token="ghu_abc"))
    flow = _flow(relay)

    state = await flow.initialize("http://localhost:5173/app?code=abc123&foo=bar")

    assert state == Success(access_token="ghu_abc")
    assert relay.codes == ["abc123"]
    assert flow.display_url == "/app"
    assert "code" not in flow.display_url


async def test_provider_error_moves_flow_to_failed() -> None:
    relay = StubRelay(TokenExchangeResult(error="bad_verification_code"))
    flow = _flow(relay)

    state = await flow.initialize("http://localhost:5173/?code=stale")

    assert state == Failed(message="bad_verification_code")
    assert flow.display_url == "http://localhost:5173/?code=stale"


async def test_body_without_token_or_error_uses_fallback_message() -> None:
    flow = _flow(StubRelay(TokenExchangeResult()))

    state = await flow.initialize("http://localhost:5173/?code=abc")

    assert state == Failed(message="Failed to get access token")


async def test_empty_access_token_is_not_success() -> None:
    flow = _flow(StubRelay(TokenExchangeResult(access_token="")))

    state = await flow.initialize("http://localhost:5173/?code=abc")

    assert isinstance(state, Failed)


async def test_relay_transport_failure_uses_generic_message() -> None:
    flow = _flow(StubRelay(error=RelayTransportError("connection refused")))

    state = await flow.initialize("http://localhost:5173/?code=abc")

    assert state == Failed(message="Failed to exchange code for token")


async def test_initialize_runs_exchange_exactly_once() -> None:
    relay = StubRelay(TokenExchangeResult(access_token="ghu_abc"))
    flow = _flow(relay)
    await flow.initialize("http://localhost:5173/?code=abc123")

    with pytest.raises(FlowAlreadyInitializedError):
        await flow.initialize("http://localhost:5173/?code=abc123")

    assert relay.codes == ["abc123"]
    assert isinstance(flow.state, Success)


async def test_login_builds_authorize_url_from_idle() -> None:
    flow = _flow(StubRelay())
    await flow.initialize("http://localhost:5173/")

    assert flow.login() == (
        "https://github.com/login/oauth/authorize?client_id=public-id&scope=repo"
    )


async def test_login_is_not_offered_after_success() -> None:
    flow = _flow(StubRelay(TokenExchangeResult(access_token="ghu_abc")))
    await flow.initialize("http://localhost:5173/?code=abc")

    with pytest.raises(InvalidFlowStateError):
        flow.login()


async def test_copy_requires_a_token() -> None:
    flow = _flow(StubRelay(), clipboard=MemoryClipboard())
    await flow.initialize("http://localhost:5173/")

    with pytest.raises(InvalidFlowStateError):
        await flow.copy()


async def test_copy_writes_token_and_acknowledgement_resets() -> None:
    clipboard = MemoryClipboard()
    flow = _flow(
        StubRelay(TokenExchangeResult(access_token="ghu_abc")),
        clipboard=clipboard,
        copy_ack_seconds=0.05,
    )
    await flow.initialize("http://localhost:5173/?code=abc")

    await flow.copy()

    assert clipboard.text == "ghu_abc"
    assert flow.copy_ack.label == CopyAcknowledgement.COPIED_LABEL

    await anyio.sleep(0.2)

    assert flow.copy_ack.label == CopyAcknowledgement.DEFAULT_LABEL
    assert clipboard.text == "ghu_abc"


async def test_acknowledgement_defaults_to_two_seconds() -> None:
    ack = CopyAcknowledgement(MemoryClipboard())

    assert ack.reset_after_ms == 2000
    assert ack.label == "Copy"


async def test_acknowledgement_holds_until_delay_elapses() -> None:
    clipboard = MemoryClipboard()
    ack = CopyAcknowledgement(clipboard, reset_after=0.3)

    await ack.copy("ghu_abc")
    await anyio.sleep(0.05)

    assert ack.copied
    assert ack.label == "Copied!"


async def test_flow_is_loading_while_the_relay_call_is_in_flight() -> None:
    from ghtoken.ui import Loading, render_page

    seen: list[str] = []

    class ObservingRelay(StubRelay):
        async def exchange(self, code: str) -> TokenExchangeResult:
            seen.append(type(flow.state).__name__)
            seen.append(render_page(flow))
            return TokenExchangeResult(access_token="ghu_abc")

    flow = _flow(ObservingRelay())
    await flow.initialize("http://localhost:5173/?code=abc123")

    assert seen[0] == Loading.__name__
    assert "Authenticating with GitHub..." in seen[1]
    assert isinstance(flow.state, Success)
