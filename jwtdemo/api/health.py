"""Health check endpoint (no authentication)."""

from fastapi import APIRouter
from pydantic import BaseModel

from jwtdemo.core import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """The service holds no external connections, so being up means healthy."""
    return HealthResponse(status="healthy", version=settings.app_version)
