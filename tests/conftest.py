"""Pytest configuration and fixtures for jwtdemo tests.

Time is virtual everywhere: the server's TokenService and the client's
sweep both read the same VirtualScheduler clock, so tests move time with
``scheduler.advance`` instead of sleeping.
"""

import base64
import json
import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app modules
os.environ["JWT_SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789"
os.environ["LOG_LEVEL"] = "INFO"

from jwtdemo.client import ClientSessionManager, MemoryTokenStorage, VirtualScheduler  # noqa: E402
from jwtdemo.core import Settings  # noqa: E402
from jwtdemo.main import create_app  # noqa: E402
from jwtdemo.services import TokenService  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET_KEY"]

# Mid-2023; any fixed instant works
START_TIME = 1_700_000_000.0

# Demo credentials
TEST_USERNAME = "Max"
TEST_PASSWORD = "777"
TEST_USER_ID = 1


def forge_claims(token: str, **changes) -> str:
    """Rewrite a token's claims segment while keeping the original signature."""
    header, payload, signature = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    claims = json.loads(base64.urlsafe_b64decode(padded))
    claims.update(changes)
    new_payload = (
        base64.urlsafe_b64encode(json.dumps(claims, separators=(",", ":")).encode())
        .rstrip(b"=")
        .decode()
    )
    return f"{header}.{new_payload}.{signature}"


# --- Login Throttle Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_login_throttle():
    """Clear failed-login bookkeeping on the module-level app around each test.

    Apps built by the ``app`` fixture are fresh per test; only the
    module-level app is shared across tests.
    """
    from jwtdemo.main import app

    app.state.login_throttle.clear()
    yield
    app.state.login_throttle.clear()


# --- Core Fixtures ---


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler(start=START_TIME)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, jwt_secret_key=TEST_SECRET)


@pytest.fixture
def token_service(scheduler) -> TokenService:
    return TokenService(secret_key=TEST_SECRET, clock=scheduler.time)


@pytest.fixture
def app(test_settings, token_service):
    return create_app(app_settings=test_settings, token_service=token_service)


@pytest_asyncio.fixture(scope="function")
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async test client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_token(token_service) -> str:
    return token_service.issue(TEST_USER_ID, TEST_USERNAME)


@pytest.fixture
def auth_headers(auth_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth_token}"}


@pytest_asyncio.fixture(scope="function")
async def session_manager(
    async_client, scheduler, test_settings
) -> AsyncGenerator[ClientSessionManager, None]:
    """Client session manager wired to the in-process app and virtual clock."""
    manager = ClientSessionManager(
        http_client=async_client,
        storage=MemoryTokenStorage(),
        scheduler=scheduler,
        settings=test_settings,
    )
    yield manager
    await manager.close()
