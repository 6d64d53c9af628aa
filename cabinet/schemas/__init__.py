"""
Pydantic request/response schemas for the Medicine Cabinet API.
"""

from cabinet.schemas.auth import LoginRequest, TokenResponse
from cabinet.schemas.user import RegisterRequest, UserResponse
from cabinet.schemas.strain import (
    StrainType,
    CommentBody,
    CommentRequest,
    CommentResponse,
    StrainCreateRequest,
    StrainResponse,
    StrainListResponse,
)

__all__ = [
    "LoginRequest",
    "TokenResponse",
    "RegisterRequest",
    "UserResponse",
    "StrainType",
    "CommentBody",
    "CommentRequest",
    "CommentResponse",
    "StrainCreateRequest",
    "StrainResponse",
    "StrainListResponse",
]
