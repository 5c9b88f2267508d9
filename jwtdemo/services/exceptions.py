"""Authentication error hierarchy.

Everything here is recovered at the HTTP boundary and turned into a
``{"success": false, "err": ...}`` body.
"""


class AuthError(Exception):
    """Base authentication error."""

    pass


class InvalidCredentialsError(AuthError):
    """Invalid username or password."""

    pass


class TokenError(AuthError):
    """JWT token error. Callers map every subclass to 401 Unauthorized."""

    pass


class TokenExpiredError(TokenError):
    """JWT token has expired."""

    pass


class InvalidTokenError(TokenError):
    """JWT token is invalid (bad signature, wrong algorithm, missing claims)."""

    pass


class MalformedTokenError(InvalidTokenError):
    """JWT token could not be decoded at all."""

    pass
