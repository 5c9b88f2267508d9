"""Login endpoint."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from jwtdemo.api.deps import get_auth_service, get_login_throttle
from jwtdemo.schemas.auth import LoginRequest, LoginResponse
from jwtdemo.services.auth import AuthService, LoginThrottle
from jwtdemo.services.exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

TOO_MANY_ATTEMPTS_MESSAGE = "Too many login attempts. Please try again later."

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": LoginResponse},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": LoginResponse},
    },
)
async def login(
    body: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
    throttle: LoginThrottle = Depends(get_login_throttle),
) -> LoginResponse | JSONResponse:
    """Authenticate and get a JWT access token.

    Failed attempts are limited per client IP.
    """
    client_ip = request.client.host if request.client else "unknown"
    if throttle.is_limited(client_ip):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=LoginResponse(success=False, err=TOO_MANY_ATTEMPTS_MESSAGE).model_dump(),
        )

    try:
        token = auth_service.login(body.username, body.password)
    except InvalidCredentialsError as e:
        throttle.record_failure(client_ip)
        logger.info(f"Failed login from {client_ip}")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginResponse(success=False, err=str(e)).model_dump(),
        )

    return LoginResponse(success=True, token=token)
