"""Configuration for the declarest HTTP transport."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Configuration for the HTTP transport.

    All settings can be configured via environment variables with DECLAREST_ prefix.

    - DECLAREST_API_URL: Origin that relative resource URLs are resolved
      against (e.g. a resource with base URL "/api/users")
    - DECLAREST_TIMEOUT: Request timeout in seconds
    - DECLAREST_FOLLOW_REDIRECTS / DECLAREST_VERIFY_SSL: httpx client options
    - DECLAREST_LOG_LEVEL: Level of the "declarest" logger
    """

    model_config = SettingsConfigDict(
        env_prefix="DECLAREST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_url", "DECLAREST_API_URL", "DECLAREST_URL"),
    )
    timeout: float = Field(default=30.0, ge=1.0, le=300.0)
    follow_redirects: bool = Field(default=True)
    verify_ssl: bool = Field(default=True)

    log_level: str = Field(default="INFO")

    @field_validator("api_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate URL format and strip trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
