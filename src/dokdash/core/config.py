# dokdash/core/config.py
"""
Central configuration for the dashboard.

Environment variables override defaults. The upstream base URL and API key
are read here once and handed to the aggregator explicitly.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    log_json: bool = Field(
        default=False,
        description="Emit JSON log records instead of plain text",
    )

    # Dokploy upstream
    dokploy_base_url: str = Field(
        default="",
        description="Dokploy instance URL; '/api' is appended when missing (empty = unconfigured)",
    )
    dokploy_api_key: str = Field(
        default="",
        description="Sent as x-api-key when set",
    )
    dokploy_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout for upstream calls, in seconds",
    )

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000

    # Terminal client
    dokdash_pins_path: str = Field(
        default="~/.config/dokdash/pins.json",
        description="JSON file holding pinned entry ids for the CLI",
    )


settings = Settings()
