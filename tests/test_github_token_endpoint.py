try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from ghtoken import dependencies
from ghtoken.clients import GitHubOAuthClient

pytestmark = pytest.mark.anyio("asyncio")


class RecordingGitHub:
    """Stands in for github.com's token endpoint via httpx.MockTransport."""

    def __init__(self, *, body: bytes = b"", status_code: int = 200, error=None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            content=self.body,
            headers={"content-type": "application/json; charset=utf-8"},
        )


@pytest.fixture()
def github(app, settings):
    recorder = RecordingGitHub(
        body=b'{"access_token":"ghu_abc","token_type":"bearer","scope":"repo"}'
    )
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    oauth_client = GitHubOAuthClient(settings.github, http_client=http_client)
    app.dependency_overrides[dependencies.get_github_oauth_client] = lambda: oauth_client
    return recorder


async def _post(app, **kwargs) -> httpx.Response:
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        return await client.post("/api/github/token", **kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {}},
        {"json": {"code": ""}},
        {"json": {"code": None}},
        {"json": {"other": "value"}},
        {},
    ],
)
async def test_missing_code_is_rejected_without_calling_github(app, github, kwargs):
    response = await _post(app, **kwargs)

    assert response.status_code == 400
    assert response.json() == {"error": "Code is required"}
    assert github.requests == []


async def test_malformed_body_is_reported_as_missing_code(app, github):
    response = await _post(
        app, content=b"{not json", headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Code is required"}
    assert github.requests == []


async def test_code_is_forwarded_with_configured_credentials(app, github):
    response = await _post(app, json={"code": "abc123"})

    assert response.status_code == 200
    assert len(github.requests) == 1
    outbound = github.requests[0]
    assert outbound.method == "POST"
    assert str(outbound.url) == "https://github.com/login/oauth/access_token"
    assert outbound.headers["accept"] == "application/json"
    assert json.loads(outbound.content) == {
        "client_id": "client-123",
        "client_secret": "secret-456",
        "code": "abc123",
    }


async def test_provider_body_is_relayed_verbatim(app, github):
    response = await _post(app, json={"code": "abc123"})

    assert response.status_code == 200
    assert response.content == github.body
    assert response.json()["access_token"] == "ghu_abc"


async def test_provider_rejection_is_passed_through_with_200(app, github):
    github.body = (
        b'{"error":"bad_verification_code",'
        b'"error_description":"The code passed is incorrect or expired."}'
    )

    response = await _post(app, json={"code": "expired"})

    assert response.status_code == 200
    assert response.json()["error"] == "bad_verification_code"
    assert response.content == github.body


async def test_transport_failure_returns_500_without_retry(app, github, caplog):
    github.error = httpx.ConnectError("connection refused")

    with caplog.at_level("ERROR", logger="ghtoken.api.routes"):
        response = await _post(app, json={"code": "abc123"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to exchange code for token"}
    assert len(github.requests) == 1
    assert "Token exchange error" in caplog.text
    assert "secret-456" not in caplog.text


async def test_provider_server_error_returns_500(app, github):
    github.status_code = 502
    github.body = b"<html>bad gateway</html>"

    response = await _post(app, json={"code": "abc123"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to exchange code for token"}
    assert len(github.requests) == 1


async def test_healthcheck(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
