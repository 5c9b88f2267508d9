"""Shared FastAPI dependencies.

Services live on ``app.state`` (set up by ``create_app``) so tests can build
an app around their own clock, secret or credential store.
"""

from fastapi import Request

from jwtdemo.services.auth import AuthService, LoginThrottle
from jwtdemo.services.exceptions import TokenError
from jwtdemo.services.tokens import TokenSubject


def get_auth_service(request: Request) -> AuthService:
    """Dependency to get auth service."""
    return request.app.state.auth_service


def get_login_throttle(request: Request) -> LoginThrottle:
    return request.app.state.login_throttle


def get_current_subject(request: Request) -> TokenSubject:
    """Subject verified by the token gate.

    Raises TokenError when the route was reached without passing the gate,
    which the app maps to the same 401 body the gate produces.
    """
    subject = getattr(request.state, "subject", None)
    if subject is None:
        raise TokenError("Authentication required")
    return subject
