"""Relay configuration using pydantic-settings.

This module defines the SlackSettings and RelaySettings classes that read
configuration from environment variables. The Slack endpoint is read from
SLACK_URL; the remaining options use the RELAY_ prefix.

SLACK_URL is deliberately optional at load time. A missing or empty value
is reported by the webhook handler as a normal outcome rather than as a
configuration error.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlackSettings(BaseSettings):
    """Slack delivery configuration from environment variables.

    Holds only SLACK_URL, so it loads even when the other relay options
    are invalid.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
    )

    # Incoming webhook URL; empty means not configured
    slack_url: str = Field(default="", validation_alias="SLACK_URL")

    @property
    def slack_configured(self) -> bool:
        """Whether a non-empty Slack URL is available."""
        return bool(self.slack_url)


class RelaySettings(SlackSettings):
    """Relay configuration from environment variables.

    Environment variables:
    - SLACK_URL: Slack incoming webhook URL to post notifications to
    - RELAY_LOG_PAYLOADS: Log the raw inbound payload on every invocation
    - RELAY_LOG_LEVEL: Root logging level for the entry points
    - RELAY_HOST / RELAY_PORT: Bind address for the HTTP server
    """

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        case_sensitive=False,
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------
    # Raw payloads may carry issue bodies and user data
    log_payloads: bool = True

    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    host: str = "0.0.0.0"

    port: int = 8080

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the logging level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard level name, got {v!r}")
        return level

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v


def get_settings() -> RelaySettings:
    """Create and return a RelaySettings instance.

    A new instance is built on each call so that every invocation sees the
    current environment.

    Returns:
        RelaySettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If an option is present but invalid.
    """
    return RelaySettings()


def get_slack_settings() -> SlackSettings:
    """Create and return a SlackSettings instance.

    Used when the full RelaySettings cannot be loaded, so that an invalid
    logging or server option never blocks delivery.

    Returns:
        SlackSettings: Settings holding only the Slack URL.
    """
    return SlackSettings()
