"""
Medicine Cabinet application settings.

Extends the base settings with Medicine Cabinet-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Medicine Cabinet-specific settings."""

    # ==========================================================================
    # Account Settings
    # ==========================================================================
    USERNAME_MIN_LENGTH: int = 1
    PASSWORD_MIN_LENGTH: int = 10
    PASSWORD_MAX_LENGTH: int = 72  # bcrypt input limit

    # ==========================================================================
    # Client Settings
    # ==========================================================================
    # Base URL the client library talks to
    API_BASE_URL: str = "http://localhost:8080"

    # Proactive token refresh cadence; must stay well below JWT_EXPIRY_DAYS
    TOKEN_REFRESH_INTERVAL_SECONDS: float = 120

    # Consecutive failed refresh ticks before the client logs out
    MAX_REFRESH_FAILURES: int = 3

    # HTTP timeout for client requests
    CLIENT_TIMEOUT_SECONDS: float = 10.0


# Global settings instance
settings = Settings()
