"""Authentication service - credential check plus token issuance."""

import logging
import time
from collections import defaultdict

from jwtdemo.services.credentials import CredentialStore
from jwtdemo.services.exceptions import InvalidCredentialsError
from jwtdemo.services.tokens import TokenService

logger = logging.getLogger(__name__)

GENERIC_LOGIN_ERROR = "Username or Password is Incorrect!"


class AuthService:
    """Service for login operations."""

    def __init__(self, credential_store: CredentialStore, token_service: TokenService):
        self.credential_store = credential_store
        self.token_service = token_service

    def authenticate(self, username: str, password: str) -> int:
        """Return the user id for valid credentials.

        Raises InvalidCredentialsError for both "user not found" and
        "wrong password" to prevent user enumeration.
        """
        user_id = self.credential_store.verify(username, password)
        if user_id is None:
            raise InvalidCredentialsError(GENERIC_LOGIN_ERROR)
        return user_id

    def login(self, username: str, password: str) -> str:
        """Authenticate and issue an access token."""
        user_id = self.authenticate(username, password)
        token = self.token_service.issue(user_id, username)
        logger.info(f"User logged in: {username}")
        return token


class LoginThrottle:
    """Sliding-window counter of failed login attempts per client IP."""

    def __init__(self, max_attempts: int = 5, window_seconds: float = 60):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._attempts: dict[str, list[float]] = defaultdict(list)

    def is_limited(self, client_ip: str) -> bool:
        """Check whether the client has used up its failed attempts."""
        now = time.monotonic()
        attempts = [
            t for t in self._attempts.get(client_ip, []) if now - t < self.window_seconds
        ]
        if attempts:
            self._attempts[client_ip] = attempts
        else:
            # No failures left in the window
            self._attempts.pop(client_ip, None)
        if len(attempts) >= self.max_attempts:
            logger.warning("Login rate limit exceeded for %s", client_ip)
            return True
        return False

    def record_failure(self, client_ip: str) -> None:
        self._attempts[client_ip].append(time.monotonic())

    def clear(self) -> None:
        self._attempts.clear()
