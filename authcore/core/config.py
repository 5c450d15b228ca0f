"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables
(prefix ``AUTHCORE_``). Every field has a safe default, so the core works
without any environment at all; the host application overrides what it
needs.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from authcore.core.config import settings

    threshold = settings.suspicious_failed_login_threshold
    if settings.is_development:
        ...
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authcore.core.enums import Environment


class Settings(BaseSettings):
    """
    Authentication core settings (flat structure).

    Configuration precedence:
        1. Environment variables (AUTHCORE_*)
        2. Default values

    Returns:
        Settings: Configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="authcore",
        description="Application name (attached to security events)",
    )

    # Password policy
    password_min_length: int = Field(
        default=8,
        description="Minimum password length enforced by validate_password",
    )

    # Suspicious activity detection
    suspicious_activity_window_hours: int = Field(
        default=24,
        description="Look-back window for suspicious activity checks",
    )
    suspicious_failed_login_threshold: int = Field(
        default=5,
        description="Failed logins above this count raise a HIGH alert",
    )
    suspicious_password_change_threshold: int = Field(
        default=2,
        description="Password changes above this count raise a MEDIUM alert",
    )
    security_events_default_limit: int = Field(
        default=50,
        description="Default page size for get_security_events",
    )

    # Session timeout preference
    session_timeout_default_minutes: int = Field(
        default=30,
        description="Session timeout used when the user has not chosen one",
    )
    session_timeout_min_minutes: int = Field(
        default=5,
        description="Lower bound for set_session_timeout",
    )
    session_timeout_max_minutes: int = Field(
        default=1440,
        description="Upper bound for set_session_timeout (24 hours)",
    )

    # MFA challenge presentation
    mfa_masked_phone_digits: int = Field(
        default=4,
        description="Trailing phone digits left visible in masked MFA targets",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTHCORE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level name.

        Args:
            v: Log level name.

        Returns:
            str: Upper-cased log level.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator(
        "password_min_length",
        "suspicious_activity_window_hours",
        "security_events_default_limit",
        "session_timeout_min_minutes",
        "mfa_masked_phone_digits",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """
        Reject zero and negative values.

        Args:
            v: Integer setting.

        Returns:
            int: The validated value.

        Raises:
            ValueError: If value is not positive.
        """
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @model_validator(mode="after")
    def validate_session_timeout_bounds(self) -> "Settings":
        """
        Ensure the session timeout default sits inside its bounds.

        Raises:
            ValueError: If min > max or the default is out of range.
        """
        low = self.session_timeout_min_minutes
        high = self.session_timeout_max_minutes
        if low > high:
            raise ValueError("session_timeout_min_minutes must not exceed max")
        if not low <= self.session_timeout_default_minutes <= high:
            raise ValueError("session_timeout_default_minutes must be within bounds")
        return self

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """True if environment is DEVELOPMENT."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """True if environment is TESTING."""
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        """True if environment is CI."""
        return self.environment == Environment.CI

    @property
    def is_production(self) -> bool:
        """True if environment is PRODUCTION."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
