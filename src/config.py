"""
Application configuration management using Pydantic Settings.
Handles environment variables and default values for the service.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host address")
    api_port: int = Field(default=8000, description="API port")
    api_debug: bool = Field(default=False, description="Enable debug mode")
    api_reload: bool = Field(default=False, description="Enable auto-reload")

    # ENTSO-E Transparency Platform Configuration
    entsoe_api_token: Optional[str] = Field(
        default=None,
        description="Security token for the ENTSO-E Transparency Platform API"
    )
    entsoe_base_url: str = Field(
        default="https://web-api.tp.entsoe.eu/api",
        description="Base URL for the ENTSO-E REST API"
    )
    market_zone: str = Field(
        default="10YNL----------L",
        description="EIC code of the bidding zone (default: Netherlands)"
    )
    fetch_timeout: float = Field(default=30.0, description="HTTP timeout for price fetches in seconds")

    # Price data handling
    cache_ttl_seconds: int = Field(default=3600, description="Lifetime of cached price data")
    strict_resolution: bool = Field(
        default=False,
        description="Reject unknown series resolutions instead of treating them as hourly"
    )
    use_simulated_data: bool = Field(
        default=False,
        description="Serve simulated prices instead of calling ENTSO-E"
    )
    fallback_to_simulated: bool = Field(
        default=False,
        description="Serve simulated prices when the ENTSO-E fetch fails"
    )
    display_timezone: str = Field(
        default="Europe/Amsterdam",
        description="Timezone for clock times in recommendation messages"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json/text)")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


# Global settings instance
settings = Settings()
