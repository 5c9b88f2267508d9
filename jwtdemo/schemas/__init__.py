from jwtdemo.schemas.auth import ContentResponse, ErrorResponse, LoginRequest, LoginResponse

__all__ = [
    "ContentResponse",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
]
