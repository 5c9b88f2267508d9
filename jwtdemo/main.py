"""jwtdemo Server - FastAPI Application Factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jwtdemo.api import PROTECTED_PATHS, api_router
from jwtdemo.api.health import router as health_router
from jwtdemo.core import Settings, get_settings, setup_logging
from jwtdemo.core.logging import get_logger
from jwtdemo.middleware import SecurityHeadersMiddleware, TokenGateMiddleware
from jwtdemo.middleware.token_gate import unauthorized_response
from jwtdemo.services.auth import AuthService, LoginThrottle
from jwtdemo.services.credentials import CredentialStore, InMemoryCredentialStore
from jwtdemo.services.exceptions import TokenError
from jwtdemo.services.tokens import TokenService

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    app_settings: Settings = app.state.settings
    setup_logging(level=app_settings.log_level, format_type=app_settings.log_format)
    logger.info(f"Starting {app_settings.app_name} v{app_settings.app_version}")

    for warning in app_settings.check_security_configuration():
        logger.warning(f"SECURITY: {warning}")

    yield

    logger.info("Shutting down...")


async def token_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return unauthorized_response(str(exc))


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in errors
    )
    return JSONResponse(
        status_code=422,
        content={"success": False, "err": message or "Invalid request"},
    )


def create_app(
    app_settings: Settings | None = None,
    token_service: TokenService | None = None,
    credential_store: CredentialStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators default to the configured token service and the demo
    in-memory credential store.
    """
    app_settings = app_settings or get_settings()
    token_service = token_service or TokenService.from_settings(app_settings)
    credential_store = credential_store or InMemoryCredentialStore()

    app = FastAPI(
        title=app_settings.app_name,
        description="Username/password login with short-lived JWT bearer tokens",
        version=app_settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        openapi_url="/openapi.json" if app_settings.debug else None,
    )

    app.state.settings = app_settings
    app.state.token_service = token_service
    app.state.auth_service = AuthService(credential_store, token_service)
    app.state.login_throttle = LoginThrottle(
        max_attempts=app_settings.login_rate_limit_attempts,
        window_seconds=app_settings.login_rate_limit_window_seconds,
    )

    # Starlette runs middleware LIFO: the headers middleware wraps the gate,
    # so 401 responses get security headers too
    app.add_middleware(
        TokenGateMiddleware,
        protected_paths=[app_settings.api_prefix + path for path in PROTECTED_PATHS],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_exception_handler(TokenError, token_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health_router)
    app.include_router(api_router, prefix=app_settings.api_prefix)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with API information."""
        return {
            "name": app_settings.app_name,
            "version": app_settings.app_version,
            "login": f"{app_settings.api_prefix}/login",
        }

    return app


# Application instance
app = create_app()
