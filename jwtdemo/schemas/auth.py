"""Pydantic schemas for the login and protected content API."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Request for login."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Login outcome. Exactly one of ``token`` / ``err`` is set."""

    success: bool
    err: str | None = None
    token: str | None = None


class ContentResponse(BaseModel):
    """Protected content payload."""

    model_config = ConfigDict(validate_by_name=True)

    success: bool = True
    my_content: str = Field(alias="myContent")


class ErrorResponse(BaseModel):
    """Error body returned for rejected requests."""

    success: bool = False
    err: str
