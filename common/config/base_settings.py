"""
Base settings loaded from the environment.

Pydantic Settings reads each field from an environment variable of the same
name, falling back to `.env` and then to the defaults below. Applications
subclass `BaseAppSettings` to add their own fields.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        TOKEN_REFRESH_INTERVAL_SECONDS: float = 120

    settings = Settings()
    settings.validate_required()
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Infrastructure settings shared by the API, the jobs and the client.
    """

    # ==========================================================================
    # Database
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "medicine-cabinet"

    # ==========================================================================
    # Tokens
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_DAYS: int = 7

    # ==========================================================================
    # Server
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=True,
    )

    def get_cors_origins(self) -> List[str]:
        """Split CORS_ORIGINS into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Fail fast on settings the server cannot run without.

        Raises:
            ValueError: Listing every problem found
        """
        errors = []

        if not self.JWT_SECRET:
            errors.append("JWT_SECRET is required to sign auth tokens")

        if self.JWT_EXPIRY_DAYS <= 0:
            errors.append("JWT_EXPIRY_DAYS must be positive")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
