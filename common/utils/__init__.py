"""
Utilities module - Common helpers for API responses, exceptions, and validation.
"""

from common.utils.responses import (
    success_response,
    error_response,
    api_exception_handler,
    request_validation_handler,
)
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from common.utils.password import validate_password

__all__ = [
    "success_response",
    "error_response",
    "api_exception_handler",
    "request_validation_handler",
    "APIException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "validate_password",
]
