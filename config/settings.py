"""Pydantic Settings for Profile Desk configuration."""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Profile API
    api_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the profile backend (without the /api prefix)",
    )

    # Web front end
    web_secret_key: str = "change-me"
    web_port: int = 5000

    # Operational
    log_level: str = "INFO"
    log_format: str = Field(default="console", description="console or json")

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


settings = Settings()
