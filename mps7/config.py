"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from typing import Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mps7.exceptions import ConfigurationError
from mps7.schema import MAX_USER_ID

# User whose running balance is reported alongside the global totals
DEFAULT_TRACKED_USER_ID = 2456938384156277127


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")
    tracked_user_id: int = Field(default=DEFAULT_TRACKED_USER_ID, alias="TRACKED_USER_ID")
    currency_symbol: str = Field(default="$", alias="CURRENCY_SYMBOL")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper
    
    @field_validator("tracked_user_id")
    @classmethod
    def validate_tracked_user_id(cls, v):
        """Tracked user must be addressable by an unsigned 64-bit id."""
        if not (0 <= v <= MAX_USER_ID):
            raise ValueError(f"Tracked user id must be between 0 and {MAX_USER_ID}")
        return v
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.
    
    Returns:
        Settings instance
    
    Raises:
        ConfigurationError: If environment values fail validation
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid configuration",
                details={"errors": [err["msg"] for err in e.errors()]}
            ) from e
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
