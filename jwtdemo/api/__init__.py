from jwtdemo.api.content import PROTECTED_PATHS
from jwtdemo.api.router import api_router

__all__ = ["PROTECTED_PATHS", "api_router"]
