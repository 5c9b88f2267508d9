"""Bearer token gate for protected routes.

One middleware guards every path in its ``protected_paths`` list, so
individual endpoints never repeat the token check. A request to a protected
path must carry ``Authorization: Bearer <token>``; the verified subject is
left on ``request.state.subject`` for the endpoint.
"""

import logging
from collections.abc import Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from jwtdemo.services.exceptions import TokenError, TokenExpiredError
from jwtdemo.services.tokens import TokenService

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "No authorization token was found"


def unauthorized_response(message: str) -> JSONResponse:
    """401 body shared by the gate and the app-level TokenError handler."""
    return JSONResponse(
        status_code=401,
        content={"success": False, "err": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(request: Request) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class TokenGateMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests to protected paths with 401."""

    def __init__(self, app: ASGIApp, protected_paths: Iterable[str]):
        super().__init__(app)
        self.protected_paths = tuple(protected_paths)

    def is_protected(self, path: str) -> bool:
        # Exact or segment-boundary match, so /api/settingsX stays public
        return any(path == p or path.startswith(p + "/") for p in self.protected_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        # CORS preflight never carries credentials
        if request.method == "OPTIONS" or not self.is_protected(path):
            return await call_next(request)

        token = extract_bearer_token(request)
        if not token:
            logger.warning(f"Protected request without token: {request.method} {path}")
            return unauthorized_response(MISSING_TOKEN_MESSAGE)

        token_service: TokenService = request.app.state.token_service
        try:
            subject = token_service.verify(token)
        except TokenExpiredError as e:
            logger.debug(f"Expired token for: {request.method} {path}")
            return unauthorized_response(str(e))
        except TokenError as e:
            logger.warning(f"Invalid token for: {request.method} {path} - {e}")
            return unauthorized_response(str(e))

        request.state.subject = subject
        return await call_next(request)
