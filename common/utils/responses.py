"""
Standard API response helpers and exception handlers.

Provides consistent response formatting for success and error cases.
Error bodies are flat objects with a top-level `message`, which is what
API clients display to the user.

Example:
    from fastapi import FastAPI, HTTPException
    from fastapi.exceptions import RequestValidationError
    from common.utils import api_exception_handler, request_validation_handler

    app = FastAPI()
    app.add_exception_handler(HTTPException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
"""

import logging
from typing import Any, Optional, Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    reason: Optional[str] = None,
    location: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "STRAIN_NOT_FOUND")
        reason: Error category (e.g., "ValidationError")
        location: Name of the request field that caused the error

    Returns:
        Dictionary with the error message at the top level
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if reason:
        error["reason"] = reason

    if location:
        error["location"] = location

    return error


async def api_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP exceptions as flat error bodies."""
    if isinstance(exc.detail, dict):
        content = dict(exc.detail)
        content.setdefault("message", "Request failed")
    else:
        content = error_response(str(exc.detail))

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Render request parsing failures as 400 errors.

    A missing body field reports "Missing field"; anything else reports
    the first validation message. The failing field name is returned
    as `location`.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    location = ".".join(loc) or None

    if first.get("type") == "missing":
        message = "Missing field"
    else:
        message = first.get("msg", "Invalid request")

    logger.debug(f"Rejected request to {request.url.path}: {message} ({location})")
    return JSONResponse(
        status_code=400,
        content=error_response(message, code="BAD_REQUEST", reason="ValidationError", location=location),
    )
