"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from ghtoken.core.config import AppSettings, GitHubSettings, UISettings
from ghtoken.main import create_app


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(
        github=GitHubSettings(
            GITHUB_CLIENT_ID="client-123",
            GITHUB_CLIENT_SECRET="secret-456",
        ),
        ui=UISettings(
            GITHUB_PUBLIC_CLIENT_ID="public-789",
            RELAY_BASE_URL="http://testserver",
        ),
    )


@pytest.fixture()
def app(settings):
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()
