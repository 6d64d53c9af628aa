"""
Authentication Router.

Handles credential login and bearer token refresh.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header

from common.auth import AuthProvider, extract_bearer_token

from cabinet.dependencies import get_auth_provider, get_user_service
from cabinet.pipelines import auth as pipelines
from cabinet.schemas.auth import LoginRequest, TokenResponse
from cabinet.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


# =============================================================================
# POST /auth/login
# =============================================================================
@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    user_service: Annotated[UserService, Depends(get_user_service)],
    auth: Annotated[AuthProvider, Depends(get_auth_provider)],
):
    """
    Authenticate user and return an auth token.

    Missing fields are rejected with 400, bad credentials with 401.
    """
    logger.info(f"Login attempt for user: {body.userName}")
    result = await pipelines.login_pipeline(
        user_service=user_service,
        auth=auth,
        user_name=body.userName,
        password=body.password,
    )
    return TokenResponse(**result)


# =============================================================================
# POST /auth/refresh
# =============================================================================
@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    auth: Annotated[AuthProvider, Depends(get_auth_provider)],
    authorization: Optional[str] = Header(None),
):
    """
    Exchange a valid bearer token for one with a later expiry.
    """
    token = extract_bearer_token(authorization)
    result = await pipelines.refresh_pipeline(auth=auth, token=token)
    return TokenResponse(**result)
