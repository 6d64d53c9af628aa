"""
JWT + bcrypt authentication provider.

A complete token implementation using:
- JWT tokens for stateless authentication
- bcrypt for secure password hashing

Example:
    auth = JWTAuth(
        secret="your-secret-key",
        expires_in=timedelta(days=7),
    )

    token = await auth.create_token("exampleUser", user={"userName": "exampleUser"})

    claims = await auth.verify_token(token)
    print(claims["sub"])  # exampleUser
"""

import base64
import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

import bcrypt as bcrypt_lib
from jose import jwt, JWTError

from common.auth.base import AuthProvider

logger = logging.getLogger(__name__)

# Claims issued by JWTAuth itself; everything else is carried over on refresh.
REGISTERED_CLAIMS = ("exp", "iat", "nbf", "sub")


class JWTAuth(AuthProvider):
    """
    JWT + bcrypt authentication provider.

    This provider handles token creation/verification and password hashing.
    User storage is left to the application's services.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
        bcrypt_rounds: int = 12,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key for JWT signing (keep this secure!)
            algorithm: JWT algorithm (default: HS256)
            expires_in: Token lifetime
            bcrypt_rounds: bcrypt cost factor
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")

        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.bcrypt_rounds = bcrypt_rounds

    def _prehash_password(self, password: str) -> str:
        """
        Pre-hash password with SHA-256 before bcrypt.

        This handles bcrypt's 72-byte limit and ensures consistent
        behavior across all password lengths.
        """
        sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(sha256_hash).decode("utf-8")

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt with SHA-256 pre-hashing."""
        prehashed = self._prehash_password(password)
        salt = bcrypt_lib.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt_lib.hashpw(prehashed.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        if not hashed:
            return False

        prehashed = self._prehash_password(password)
        try:
            return bcrypt_lib.checkpw(prehashed.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Malformed hash in storage
            logger.warning("Stored password hash could not be parsed")
            return False

    async def create_token(
        self,
        subject: str,
        **claims: Any,
    ) -> str:
        """Create a JWT token for the subject."""
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": subject,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode a JWT token."""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")

    async def refresh_token(self, token: str) -> str:
        """Re-issue a valid token with a fresh expiry and the same identity claims."""
        payload = await self.verify_token(token)

        subject = payload.get("sub")
        if not subject:
            raise ValueError("Invalid token: missing subject")

        claims = {k: v for k, v in payload.items() if k not in REGISTERED_CLAIMS}
        return await self.create_token(subject, **claims)
