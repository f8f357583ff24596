"""Application configuration from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(
        default="sqlite:///./household.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Path to server log file")

    # Locale
    locale: str = Field(default="en_US", description="Babel locale for month names and amounts")
    default_currency: str = Field(
        default="CLP", description="Currency for households created without one"
    )

    # API
    api_title: str = Field(default="Household Settlement API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")


def get_settings() -> Settings:
    """Load settings fresh from the environment."""
    return Settings()


# Global settings instance
settings = get_settings()


__all__ = ["Settings", "get_settings", "settings"]
