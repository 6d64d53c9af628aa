"""
Auth pipeline functions.

Stateless orchestration logic for login and token refresh.
"""

import logging
from typing import Dict

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

from cabinet.services.user_service import UserService

logger = logging.getLogger(__name__)


async def login_pipeline(
    user_service: UserService,
    auth: AuthProvider,
    user_name: str,
    password: str,
) -> Dict[str, str]:
    """
    Orchestrates credential login.

    Args:
        user_service: For credential checks
        auth: For token issuing
        user_name: Submitted userName
        password: Submitted password

    Returns:
        dict with authToken

    Raises:
        UnauthorizedException: Bad credentials
    """
    user = await user_service.authenticate(user_name, password)
    token = await auth.create_token(user["userName"], user=user)

    logger.info(f"Login successful for user: {user_name}")
    return {"authToken": token}


async def refresh_pipeline(
    auth: AuthProvider,
    token: str,
) -> Dict[str, str]:
    """
    Orchestrates token refresh.

    Args:
        auth: For token verification and issuing
        token: The caller's current bearer token

    Returns:
        dict with the new authToken

    Raises:
        UnauthorizedException: Token is invalid or expired
    """
    try:
        new_token = await auth.refresh_token(token)
    except ValueError as e:
        logger.warning(f"Token refresh rejected: {e}")
        raise UnauthorizedException(str(e), code="INVALID_TOKEN")

    return {"authToken": new_token}
