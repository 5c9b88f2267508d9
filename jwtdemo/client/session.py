"""Client session manager.

Owns the client's single token slot: logs in, attaches the bearer token to
protected requests, and sweeps the slot for an expired token on a fixed
interval.

The sweep only reads the token's ``exp`` claim locally and never asks the
server. A token whose claims were tampered with but are not yet expired
passes the sweep; the server's signature check still rejects it on the next
protected request.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from jwtdemo.client.scheduler import AsyncioScheduler, RecurringTask, Scheduler
from jwtdemo.client.storage import FileTokenStorage, MemoryTokenStorage, TokenStorage
from jwtdemo.core.config import Settings, get_settings
from jwtdemo.services.exceptions import MalformedTokenError
from jwtdemo.services.tokens import is_token_expired

logger = logging.getLogger(__name__)

ROUTES = ("dashboard", "settings")


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass
class ViewState:
    """What the user currently sees. The defaults are the login page at the root."""

    title: str = "Login"
    content: str | None = None
    location: str = "/"
    username: str = ""
    password: str = ""


class ClientSessionManager:
    """Single-slot bearer token session against the jwtdemo server."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        storage: TokenStorage | None = None,
        scheduler: Scheduler | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        if storage is None:
            token_file = self.settings.client_token_file
            storage = FileTokenStorage(token_file) if token_file else MemoryTokenStorage()
        self.storage = storage
        self.scheduler = scheduler or AsyncioScheduler()
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(base_url=self.settings.client_base_url)
        self.view = ViewState()
        self.reload_count = 0
        self._sweep_task: RecurringTask | None = None

    async def __aenter__(self) -> "ClientSessionManager":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def state(self) -> SessionState:
        if self.storage.get():
            return SessionState.AUTHENTICATED
        return SessionState.ANONYMOUS

    @property
    def token(self) -> str | None:
        return self.storage.get()

    def _url(self, path: str) -> str:
        return f"{self.settings.api_prefix}/{path.lstrip('/')}"

    def attach_token(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        """Return ``headers`` with the bearer token added, if the slot holds one."""
        headers = dict(headers or {})
        token = self.storage.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    # --- login ---

    def on_auth_success(self, token: str) -> None:
        self.storage.set(token)
        self.view.username = ""
        self.view.password = ""
        self.view.title = "Dashboard"
        self.view.location = "/dashboard"
        logger.info("Login succeeded, token stored")

    def on_auth_failure(self) -> None:
        # Any previously stored token is left alone
        self.view.location = "/login"
        logger.info("Login rejected")

    async def login(self, username: str | None = None, password: str | None = None) -> bool:
        """Post credentials (from the arguments or the view's input fields).

        Returns True when a token was issued and stored.
        """
        data = {
            "username": self.view.username if username is None else username,
            "password": self.view.password if password is None else password,
        }
        try:
            response = await self.http_client.post(self._url("login"), json=data)
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Login request failed: {e}")
            self.on_auth_failure()
            return False

        if not isinstance(body, dict):
            logger.error(f"Login request failed: unexpected response body {type(body).__name__}")
            self.on_auth_failure()
            return False

        if response.status_code == 200 and body.get("success") and body.get("token"):
            self.on_auth_success(body["token"])
            await self.fetch_dashboard()
            return True

        logger.debug(f"Login response {response.status_code}: {body.get('err')}")
        self.on_auth_failure()
        return False

    # --- protected content ---

    async def _fetch_protected(self, route: str) -> bool:
        try:
            response = await self.http_client.get(self._url(route), headers=self.attach_token())
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {route} data: {e}")
            return False

        if response.status_code == 401:
            # The server no longer accepts the token; drop it but keep the view
            logger.warning(f"Token rejected fetching {route}, clearing session")
            self.storage.remove()
            return False

        try:
            body = response.json()
        except ValueError:
            logger.error(f"Error fetching {route} data: non-JSON response")
            return False

        if not isinstance(body, dict):
            logger.error(f"Error fetching {route} data: unexpected response body")
            return False

        if response.status_code != 200 or not body.get("success"):
            logger.error(f"Error fetching {route} data: HTTP {response.status_code}")
            return False

        self.view.title = route.capitalize()
        self.view.content = body.get("myContent")
        return True

    async def fetch_dashboard(self) -> bool:
        return await self._fetch_protected("dashboard")

    async def fetch_settings(self) -> bool:
        return await self._fetch_protected("settings")

    async def navigate(self, route: str) -> bool:
        """Load a protected page and move the location there."""
        if route not in ROUTES:
            raise ValueError(f"Unknown route: {route!r}")
        loaded = await self._fetch_protected(route)
        self.view.location = f"/{route}"
        return loaded

    # --- expiration ---

    def is_token_expired(self, token: str | None) -> bool:
        """Unsigned local check; an undecodable token counts as expired."""
        try:
            return is_token_expired(token, self.scheduler.time())
        except MalformedTokenError:
            return True

    def expiration_sweep(self) -> bool:
        """Evict an expired token and reload to the root view.

        Returns True if a token was evicted. Does nothing while the slot is
        empty or the token is still valid.
        """
        token = self.storage.get()
        if token is None or not self.is_token_expired(token):
            return False
        self.storage.remove()
        logger.info("Token expired: removed token and reloading to root")
        self._reload()
        return True

    def _reload(self) -> None:
        self.view = ViewState()
        self.reload_count += 1

    # --- lifecycle ---

    async def bootstrap(self) -> None:
        """Resume a stored session: check expiry once, then load the dashboard.

        The local sweep runs first so an already-expired token is evicted
        without a request the server would reject anyway.
        """
        if not self.storage.get():
            return
        if not self.expiration_sweep():
            await self.fetch_dashboard()

    async def start(self) -> RecurringTask:
        """Bootstrap and schedule the periodic expiration sweep."""
        await self.bootstrap()
        if self._sweep_task is None or self._sweep_task.cancelled:
            self._sweep_task = self.scheduler.call_every(
                self.settings.client_sweep_interval_seconds, self.expiration_sweep
            )
        return self._sweep_task

    async def close(self) -> None:
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            self._sweep_task = None
        if self._owns_client:
            await self.http_client.aclose()
