"""
Pydantic models for user registration and public user data.
"""

from typing import Any, Optional
from pydantic import BaseModel


class RegisterRequest(BaseModel):
    """
    User registration request.

    Fields are loosely typed on purpose: the user service reports missing,
    mistyped and badly sized fields with a field `location`.
    """

    userName: Optional[Any] = None
    password: Optional[Any] = None
    firstName: Optional[Any] = None
    lastName: Optional[Any] = None


class UserResponse(BaseModel):
    """Public user data."""

    userName: str
    firstName: str = ""
    lastName: str = ""
