"""
Authentication request/response schemas.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """User login request."""

    userName: str
    password: str


class TokenResponse(BaseModel):
    """Login and refresh response."""

    authToken: str
