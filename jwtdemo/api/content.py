"""Protected content endpoints.

No token handling here: every path in PROTECTED_PATHS is guarded by
TokenGateMiddleware before the handler runs.
"""

import logging

from fastapi import APIRouter, Depends

from jwtdemo.api.deps import get_current_subject
from jwtdemo.schemas.auth import ContentResponse, ErrorResponse
from jwtdemo.services.tokens import TokenSubject

logger = logging.getLogger(__name__)

DASHBOARD_CONTENT = "Secret Content: You Are Authenticated to View Dashboard!!"
SETTINGS_CONTENT = "Secret Content: You Are Authenticated to View Settings!!"

# Paths (relative to the API prefix) that require a bearer token
PROTECTED_PATHS = ("/dashboard", "/settings")

router = APIRouter(tags=["content"], responses={401: {"model": ErrorResponse}})


@router.get("/dashboard", response_model=ContentResponse)
async def get_dashboard(subject: TokenSubject = Depends(get_current_subject)) -> ContentResponse:
    logger.debug(f"Dashboard served to {subject.username}")
    return ContentResponse(my_content=DASHBOARD_CONTENT)


@router.get("/settings", response_model=ContentResponse)
async def get_settings(subject: TokenSubject = Depends(get_current_subject)) -> ContentResponse:
    logger.debug(f"Settings served to {subject.username}")
    return ContentResponse(my_content=SETTINGS_CONTENT)
