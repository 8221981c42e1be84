"""Application configuration using pydantic-settings."""
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Development mode - enables the seed script
    dev_mode: bool = Field(default=False, validation_alias="DEV_MODE")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Redis - for the year-in-review cache
    redis_url: str = Field(default="redis://localhost:6379", validation_alias="REDIS_URL")
    redis_enabled: bool = Field(default=True, validation_alias="REDIS_ENABLED")
    redis_pool_size: int = Field(default=20, validation_alias="REDIS_POOL_SIZE")
    # When false, Redis errors on a live connection propagate to callers
    redis_fail_open: bool = Field(default=False, validation_alias="REDIS_FAIL_OPEN")

    # Year boundaries are computed in this IANA time zone
    timezone: str = Field(default="UTC", validation_alias="TIMEZONE")

    year_in_review_cache_ttl: int = Field(
        default=300, gt=0, validation_alias="YEAR_IN_REVIEW_CACHE_TTL",
    )
    # Upper bounds for a single cache operation / database query (None disables)
    cache_timeout_seconds: float | None = Field(
        default=2.0, gt=0, validation_alias="CACHE_TIMEOUT_SECONDS",
    )
    query_timeout_seconds: float | None = Field(
        default=10.0, gt=0, validation_alias="QUERY_TIMEOUT_SECONDS",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject time zone names that the tz database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {value!r}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        """Get the configured time zone."""
        return ZoneInfo(self.timezone)

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
