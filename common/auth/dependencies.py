"""
FastAPI authentication dependencies.

Provides a factory to create auth dependencies that can be
injected into route handlers. Works with any AuthProvider implementation.

Example:
    from common.auth import JWTAuth, create_auth_dependency

    auth = JWTAuth(secret="your-secret")

    def get_auth() -> AuthProvider:
        return auth

    get_token_claims = create_auth_dependency(get_auth)

    @app.get("/me")
    async def me(claims: dict = Depends(get_token_claims)):
        return {"userName": claims["sub"]}
"""

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str], scheme: str = "Bearer") -> str:
    """
    Pull the token out of an Authorization header value.

    Raises:
        UnauthorizedException: If the header is missing, uses another scheme, or is empty
    """
    if not authorization:
        raise UnauthorizedException("Missing authorization header")

    prefix = f"{scheme} "
    if not authorization.startswith(prefix):
        raise UnauthorizedException(
            f"Invalid authorization scheme. Expected: {scheme}",
            code="INVALID_AUTH_SCHEME",
        )

    token = authorization[len(prefix):].strip()
    if not token:
        raise UnauthorizedException("Token is empty", code="EMPTY_TOKEN")

    return token


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_auth_provider: FastAPI dependency that returns the AuthProvider instance
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency function that verifies the token and returns its claims
    """

    async def get_token_claims(
        authorization: Optional[str] = Header(None, alias=header_name),
        auth: AuthProvider = Depends(get_auth_provider),
    ) -> Dict[str, Any]:
        """
        Verify the bearer token and return its decoded claims.

        Raises:
            UnauthorizedException: If token is missing, invalid, or expired
        """
        token = extract_bearer_token(authorization, scheme)

        try:
            payload = await auth.verify_token(token)
        except ValueError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        if not payload.get("sub"):
            raise UnauthorizedException("Token missing subject", code="INVALID_TOKEN")

        return payload

    return get_token_claims
