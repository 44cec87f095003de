from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="FITPACKAGE_LOG_LEVEL")
    log_file: str | None = Field(
        default=None,
        validation_alias="FITPACKAGE_LOG_FILE",
        description="Optional rotating log file path; console only when unset",
    )
    log_json: bool = Field(default=False, validation_alias="FITPACKAGE_LOG_JSON")
    log_package_only: bool = Field(default=False, validation_alias="FITPACKAGE_LOG_PACKAGE_ONLY")
    timezone: str = Field(
        default="UTC",
        validation_alias="FITPACKAGE_TIMEZONE",
        description="IANA zone used to resolve 'today' when callers do not pass one",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Validate that the timezone is a known IANA zone."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown FITPACKAGE_TIMEZONE '{value}'. Defaulting to UTC.")
            return "UTC"
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
