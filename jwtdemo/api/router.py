"""jwtdemo API Router - aggregates the prefixed API routes."""

from fastapi import APIRouter

from jwtdemo.api import auth, content

# Prefix (settings.api_prefix) is applied when the app includes this router
api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(content.router)
