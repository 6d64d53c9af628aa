"""
Client-side error types.

Every error carries the message meant for the user. Errors raised from an
HTTP response carry the server's `message` verbatim and its status code.
"""

from typing import Optional


class CabinetError(Exception):
    """Base error for the Medicine Cabinet client."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RequestError(CabinetError):
    """The API rejected a request, or could not be reached (no status code)."""


class AuthError(RequestError):
    """Authentication failed: bad credentials, invalid or expired token, or no session."""


class CabinetValidationError(CabinetError):
    """A local check failed; no request was sent."""
