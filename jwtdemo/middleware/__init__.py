"""Middleware module for jwtdemo."""

from jwtdemo.middleware.security_headers import SecurityHeadersMiddleware
from jwtdemo.middleware.token_gate import TokenGateMiddleware

__all__ = [
    "SecurityHeadersMiddleware",
    "TokenGateMiddleware",
]
