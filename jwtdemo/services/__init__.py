"""Business logic services for jwtdemo."""

from jwtdemo.services.auth import AuthService, LoginThrottle
from jwtdemo.services.credentials import (
    DEFAULT_USERS,
    CredentialRecord,
    CredentialStore,
    InMemoryCredentialStore,
)
from jwtdemo.services.exceptions import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
)
from jwtdemo.services.tokens import (
    TokenService,
    TokenSubject,
    is_token_expired,
    read_unverified_claims,
)

__all__ = [
    "AuthError",
    "AuthService",
    "CredentialRecord",
    "CredentialStore",
    "DEFAULT_USERS",
    "InMemoryCredentialStore",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "LoginThrottle",
    "MalformedTokenError",
    "TokenError",
    "TokenExpiredError",
    "TokenService",
    "TokenSubject",
    "is_token_expired",
    "read_unverified_claims",
]
