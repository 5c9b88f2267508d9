"""Session token service - issues and verifies short-lived JWT bearer tokens.

Tokens are self-contained: the server keeps no session table, so any process
holding the secret can verify them. The price is that a token cannot be
revoked before it expires, which the 3 minute TTL keeps tolerable.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import jwt
from jwt.exceptions import DecodeError, InvalidSignatureError, PyJWTError

from jwtdemo.core.config import Settings
from jwtdemo.services.exceptions import (
    InvalidTokenError,
    MalformedTokenError,
    TokenExpiredError,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 180

REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


@dataclass(frozen=True)
class TokenSubject:
    """Identity asserted by a verified token."""

    subject_id: int
    username: str


def read_unverified_claims(token: str | None) -> dict[str, Any]:
    """Decode the claims segment of a token without checking its signature.

    Raises MalformedTokenError if the token is missing or cannot be decoded.
    """
    if not token:
        raise MalformedTokenError("No token")
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except PyJWTError as e:
        raise MalformedTokenError(f"Malformed token: {e}") from e


def is_token_expired(token: str | None, now: float) -> bool:
    """Local expiration check against the unverified ``exp`` claim."""
    exp = read_unverified_claims(token).get("exp")
    if not isinstance(exp, int | float) or isinstance(exp, bool):
        raise MalformedTokenError("Token has no numeric exp claim")
    return now >= exp


class TokenService:
    """Issue, verify and inspect HS256-signed access tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @classmethod
    def from_settings(
        cls, settings: Settings, clock: Callable[[], float] = time.time
    ) -> "TokenService":
        return cls(
            secret_key=settings.effective_jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.access_token_ttl_seconds,
            clock=clock,
        )

    def issue(self, subject_id: int, subject_name: str) -> str:
        """Create a signed token for the subject, valid for ``ttl_seconds``."""
        issued_at = int(self._clock())
        payload = {
            "sub": str(subject_id),
            "username": subject_name,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        logger.debug(f"Issued token for subject={subject_id} exp={payload['exp']}")
        return str(token)

    def verify(self, token: str) -> TokenSubject:
        """Verify signature and expiry, returning the token's subject.

        Expiry is checked against the injected clock rather than PyJWT's
        wall clock, so ``exp`` and ``iat`` validation are done here.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except InvalidSignatureError as e:
            raise InvalidTokenError("Invalid token: signature verification failed") from e
        except DecodeError as e:
            raise MalformedTokenError(f"Malformed token: {e}") from e
        except PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        exp = payload["exp"]
        if not isinstance(exp, int | float) or isinstance(exp, bool):
            raise InvalidTokenError("Invalid token: exp claim must be a number")
        if self._clock() >= exp:
            raise TokenExpiredError("Token has expired")

        try:
            subject_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token: subject is not a user id") from e

        return TokenSubject(subject_id=subject_id, username=str(payload["username"]))

    def is_expired(self, token: str) -> bool:
        """Compare the token's ``exp`` claim with the current time.

        The signature is NOT checked: a token with a forged but unexpired
        claim reports False here while ``verify`` still rejects it.
        """
        return is_token_expired(token, self._clock())
