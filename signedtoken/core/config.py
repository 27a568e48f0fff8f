"""Configuration with validation."""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .algorithms import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS, is_supported
from .token_codec import DEFAULT_SECRET_KEY


class Environment(str, Enum):
    """Deployment environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Settings with validation.

    Values come from environment variables or a ``.env`` file. The login
    fields are the single stored credential pair the login service checks
    submissions against.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment (development/production)"
    )

    # Token signing
    # JWT_SECRET_KEY: HMAC key. Default is a placeholder, override in production.
    # JWT_EXPIRE_SECONDS: 0 disables expiry; otherwise tokens carry `expired`.
    jwt_secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="HMAC signing secret (override in production)"
    )
    jwt_expire_seconds: int = Field(
        default=0,
        ge=0,
        description="Token lifetime in seconds (0 = never expires)"
    )
    jwt_algorithm: str = Field(
        default=DEFAULT_ALGORITHM,
        description=f"Signing algorithm, one of {', '.join(SUPPORTED_ALGORITHMS)}"
    )

    # Stored login credentials
    login_username: str = Field(default="admin", description="Configured login username")
    login_password: str = Field(default="", description="Configured login password")

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    @field_validator('jwt_algorithm')
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Validate the algorithm against the registry."""
        v_upper = v.upper()
        if not is_supported(v_upper):
            raise ValueError(f"Unsupported algorithm. Must be one of: {list(SUPPORTED_ALGORITHMS)}")
        return v_upper

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ('json', 'text'):
            raise ValueError("Invalid log format. Must be 'json' or 'text'")
        return v_lower

    def get(self, key: str, default: Any = None) -> Any:
        """Key lookup used by the login service (``settings.get("login_username")``)."""
        if key in type(self).model_fields:
            return getattr(self, key)
        return default

    def validate_production_config(self) -> None:
        """Validate configuration for production environment.

        In production, fails if security-critical settings use insecure defaults.
        In development, returns silently so local setups keep working.

        Raises:
            ConfigurationError: If production config is insecure.
        """
        errors: list[str] = []

        if self.jwt_secret_key == DEFAULT_SECRET_KEY:
            errors.append(
                "JWT_SECRET_KEY is using the default placeholder value. "
                "Generate a secure key: openssl rand -hex 32"
            )

        if not self.login_password:
            errors.append("LOGIN_PASSWORD is empty.")

        if errors and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(errors)
            )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
