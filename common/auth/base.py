"""
Abstract authentication provider interface.

Defines the contract that all auth providers must implement.
This allows swapping token strategies without changing application code.

Example:
    from common.auth import AuthProvider, JWTAuth

    def get_auth_provider(settings) -> AuthProvider:
        return JWTAuth(secret=settings.JWT_SECRET)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    Token methods are async to support both local and remote implementations.
    """

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """
        Hash a password for storage.

        Args:
            password: Plain text password

        Returns:
            Hash string safe to persist
        """
        pass

    @abstractmethod
    def verify_password(self, password: str, hashed: str) -> bool:
        """
        Check a plain text password against a stored hash.

        Args:
            password: Plain text password
            hashed: Stored hash

        Returns:
            True if the password matches
        """
        pass

    @abstractmethod
    async def create_token(
        self,
        subject: str,
        **claims: Any,
    ) -> str:
        """
        Create an authentication token.

        Args:
            subject: Value of the `sub` claim (the user's name)
            **claims: Additional claims to include in the token

        Returns:
            The authentication token string
        """
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an authentication token.

        Args:
            token: The token to verify

        Returns:
            Dictionary containing decoded token claims

        Raises:
            ValueError: If token is malformed, badly signed, or expired
        """
        pass

    @abstractmethod
    async def refresh_token(self, token: str) -> str:
        """
        Exchange a valid token for one with a later expiry.

        Args:
            token: A currently valid token

        Returns:
            New token carrying the same identity claims

        Raises:
            ValueError: If token is malformed, badly signed, or expired
        """
        pass
