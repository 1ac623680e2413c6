"""
Configuration management using Pydantic settings.

Provides defaults for tools that parse robots.txt on behalf of a crawler.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RobotsConfig(BaseSettings):
    """Settings for robots.txt evaluation."""

    model_config = SettingsConfigDict(env_prefix="ROBOTS_", env_file=".env", extra="ignore")

    # Identity
    user_agent: str = Field(default="*", description="Crawler name matched against User-Agent groups")

    # Input limits (the parser itself does not cap input)
    max_body_bytes: int = Field(
        default=500 * 1024,
        ge=0,
        description="Bytes of robots.txt considered before parsing (500 KiB)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")

    def clip(self, body: bytes) -> bytes:
        """Truncate a robots.txt body to the configured size."""
        return body[:self.max_body_bytes]


def get_config(**overrides) -> RobotsConfig:
    """Get configuration with optional overrides."""
    return RobotsConfig(**overrides)
