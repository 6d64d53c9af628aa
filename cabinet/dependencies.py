"""
FastAPI dependencies for the Medicine Cabinet API.

Provides dependency injection for the auth provider and services.
"""

import logging
from datetime import timedelta
from typing import Optional, Dict, Any

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import AuthProvider, JWTAuth, create_auth_dependency

from cabinet.config import settings
from cabinet.services.user_service import UserService
from cabinet.services.strain_service import StrainService

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

_auth_provider: Optional[AuthProvider] = None
_user_service: Optional[UserService] = None
_strain_service: Optional[StrainService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization
# ─────────────────────────────────────────────────────────────────

def init_services(db: AsyncIOMotorDatabase, auth: Optional[AuthProvider] = None) -> None:
    """
    Initialize the auth provider and services.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        auth: Auth provider to use (defaults to JWTAuth built from settings)
    """
    global _auth_provider, _user_service, _strain_service

    _auth_provider = auth or JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(days=settings.JWT_EXPIRY_DAYS),
    )
    _user_service = UserService(
        db=db,
        auth=_auth_provider,
        username_min_length=settings.USERNAME_MIN_LENGTH,
        password_min_length=settings.PASSWORD_MIN_LENGTH,
        password_max_length=settings.PASSWORD_MAX_LENGTH,
    )
    _strain_service = StrainService(db=db)
    logger.info("Services initialized")


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get auth provider instance."""
    if _auth_provider is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _auth_provider


def get_user_service() -> UserService:
    """Get user service instance."""
    if _user_service is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _user_service


def get_strain_service() -> StrainService:
    """Get strain service instance."""
    if _strain_service is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _strain_service


# Provider is injected with Depends, so dependency_overrides[get_auth_provider] applies
_get_token_claims = create_auth_dependency(get_auth_provider)


async def require_auth(
    claims: Dict[str, Any] = Depends(_get_token_claims),
) -> Dict[str, Any]:
    """
    Require a valid bearer token.

    Returns:
        Decoded token claims; `sub` is the caller's userName
    """
    return claims
